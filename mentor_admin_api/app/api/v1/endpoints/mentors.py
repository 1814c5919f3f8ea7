"""
Mentor endpoints for API v1.

Administrators list mentors, inspect the tasks assigned to a mentor,
remove a mentor from a task and delete a mentor together with all of
its task assignments.  The task search endpoint is open to any caller.

Any failure of an operation is logged here with its cause and returned
to the client as that operation's generic message.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from mentor_admin_api.app.core.config import settings
from mentor_admin_api.app.core.db import ROLE_ADMIN
from mentor_admin_api.app.core.exceptions import (
    BadRequestError,
    InternalServerError,
    NotFoundError,
)
from mentor_admin_api.app.core.security import require_admin, require_roles
from mentor_admin_api.app.schemas.common import MessageResponse
from mentor_admin_api.app.schemas.mentor import MentorListResponse
from mentor_admin_api.app.schemas.task import MentorTaskListResponse
from mentor_admin_api.app.services.mentor_service import MentorService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=MentorListResponse)
async def list_mentors(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Number of mentors per page",
    ),
    current_user: Dict[str, Any] = Depends(require_admin),
) -> MentorListResponse:
    """Return a page of mentors (id, first and last name).  Admin only."""
    mentors = await MentorService.list_mentors(page=page, limit=limit)
    return MentorListResponse(mentors=mentors)


@router.get("/{mentor_id}/tasks", response_model=MentorTaskListResponse)
async def get_mentor_tasks(
    mentor_id: int,
    search: Optional[str] = Query(
        None, description="Case-insensitive text matched against task title or description"
    ),
    current_user: Dict[str, Any] = Depends(require_admin),
) -> MentorTaskListResponse:
    """Return the tasks assigned to a mentor with their reports.  Admin only.

    Each task carries its creator's name, its mentor assignments, its
    reports and ``taskReportCount``.  An unknown mentor or a search with
    no match yields an empty list.
    """
    try:
        tasks = await MentorService.list_mentor_tasks(mentor_id, search=search)
    except Exception:
        logger.exception("Fetching tasks of mentor %s failed", mentor_id)
        raise InternalServerError("Error fetching task.")
    return MentorTaskListResponse(data=tasks)


@router.get("/{mentor_id}/tasks/search", response_model=MentorTaskListResponse)
async def search_mentor_tasks(
    mentor_id: int,
    query: str = Query(..., description="Text matched against task title or description"),
) -> MentorTaskListResponse:
    """Search tasks by title within a mentor's tasks, or by description
    across all tasks.

    A task whose description matches ``query`` is returned even when it
    is not assigned to ``mentor_id``.  No authentication is required.
    """
    try:
        tasks = await MentorService.search_mentor_tasks(mentor_id, query)
    except Exception:
        logger.exception("Searching tasks of mentor %s failed", mentor_id)
        raise InternalServerError("Error fetching tasks.")
    return MentorTaskListResponse(data=tasks)


@router.delete("/{mentor_id}/tasks/{task_id}", response_model=MessageResponse)
async def remove_mentor_from_task(
    mentor_id: int,
    task_id: int,
    current_user: Dict[str, Any] = Depends(
        require_roles(ROLE_ADMIN, message="You are not authorized to perform this action")
    ),
) -> MessageResponse:
    """Remove a mentor from one task.  Admin only.

    Responds with 400 if the mentor is not assigned to the task.
    """
    try:
        await MentorService.remove_mentor_from_task(
            task_id=task_id, mentor_id=mentor_id, actor_id=current_user.get("user_id")
        )
    except NotFoundError:
        raise BadRequestError("Mentor not found for this task")
    except Exception:
        logger.exception("Removing mentor %s from task %s failed", mentor_id, task_id)
        raise InternalServerError("Error removing mentor from task.")
    return MessageResponse(status="success", message="Mentor removed from task")


@router.delete("/{mentor_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def delete_mentor(
    mentor_id: int,
    current_user: Dict[str, Any] = Depends(require_admin),
) -> MessageResponse:
    """Delete a mentor and all of its task assignments.  Admin only.

    The mentor and its assignments are removed in one transaction.  An
    unknown id, a user without the mentor role and storage failures all
    respond with the same 400.
    """
    try:
        await MentorService.delete_mentor(mentor_id, actor_id=current_user.get("user_id"))
    except Exception:
        logger.warning("Deleting mentor %s failed", mentor_id, exc_info=True)
        raise BadRequestError("Error deleting User", status_label="Error")
    return MessageResponse(message="Mentor deleted successfully")
