"""
Pydantic models for tasks assigned to mentors.

``MentorTaskRead`` is the flat record returned by the mentor task
listing and search endpoints: the task's own fields, the creator's
display name, its mentor assignments and its reports.  The
``task_report_count`` field is always derived from ``reports`` and is
never stored.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from .common import CamelModel


class TaskReportRead(CamelModel):
    """A report entry attached to a task."""

    id: int
    achievement: Optional[str] = None
    blocker: Optional[str] = None
    recommendation: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskMentorRead(CamelModel):
    """One mentor assignment of a task."""

    id: int
    mentor_id: int


class MentorTaskRead(CamelModel):
    id: int
    title: str = Field(..., example="Onboarding plan")
    description: Optional[str] = Field(None, example="Weekly onboarding check-ins")
    meta: Any = None
    creator_user_id: Optional[int] = None
    created_by: Optional[str] = Field(None, example="Grace Hopper")
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    type_of_report: Optional[str] = Field(None, example="weekly")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    mentors: List[TaskMentorRead] = Field(default_factory=list)
    reports: List[TaskReportRead] = Field(default_factory=list)
    task_report_count: int = 0

    @model_validator(mode="after")
    def _count_reports(self) -> "MentorTaskRead":
        self.task_report_count = len(self.reports)
        return self


class MentorTaskListResponse(BaseModel):
    status: str = "success"
    message: str = "Tasks fetched successfully"
    data: List[MentorTaskRead]
