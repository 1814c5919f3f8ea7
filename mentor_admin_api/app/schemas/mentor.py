"""
Pydantic models for mentor listings.
"""

from typing import List

from pydantic import BaseModel, Field

from .common import CamelModel, PageMeta


class MentorRead(CamelModel):
    """A mentor as shown in admin listings."""

    id: int
    first_name: str = Field(..., example="Ada")
    last_name: str = Field(..., example="Lovelace")


class MentorPage(BaseModel):
    meta: PageMeta
    data: List[MentorRead]


class MentorListResponse(BaseModel):
    status: str = "success"
    message: str = "Fetched all mentors successful"
    mentors: MentorPage
