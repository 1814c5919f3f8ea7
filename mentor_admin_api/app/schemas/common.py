"""
Shared schema building blocks.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys.

    ``populate_by_name`` keeps construction by the Python field name
    working (``MentorRead(first_name=...)``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageMeta(CamelModel):
    """Pagination metadata returned alongside a page of rows."""

    total: int = Field(..., example=42)
    per_page: int = Field(..., example=10)
    current_page: int = Field(..., example=1)
    last_page: int = Field(..., example=5)
    first_page: int = Field(1, example=1)

    @classmethod
    def build(cls, total: int, page: int, per_page: int) -> "PageMeta":
        last_page = max(1, -(-total // per_page))
        return cls(total=total, per_page=per_page, current_page=page, last_page=last_page, first_page=1)


class MessageResponse(BaseModel):
    """Acknowledgement body for mutations."""

    status: Optional[str] = Field(None, example="success")
    message: str = Field(..., example="Mentor removed from task")
