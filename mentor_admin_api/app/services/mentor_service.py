"""
Business logic for mentors and their task assignments.

``MentorService`` lists mentors, lists and searches the tasks assigned
to a mentor, removes a mentor from a task and deletes a mentor.  Read
operations open a plain connection; mentor deletion runs as one
transaction (see ``core.db.transaction``) so the user row and all of
its assignments disappear together or not at all.

Storage errors (``sqlite3.Error``) and ``NotFoundError`` propagate to
the caller; the API layer decides what the client sees.
"""

import logging
import sqlite3
from typing import List, Optional

from mentor_admin_api.app.core.db import get_connection, transaction
from mentor_admin_api.app.core.exceptions import NotFoundError
from mentor_admin_api.app.repositories.task_mentor_repository import TaskMentorRepository
from mentor_admin_api.app.repositories.task_repository import TaskRepository, decode_meta
from mentor_admin_api.app.repositories.user_repository import UserRepository
from mentor_admin_api.app.schemas.common import PageMeta
from mentor_admin_api.app.schemas.mentor import MentorPage, MentorRead
from mentor_admin_api.app.schemas.task import MentorTaskRead, TaskMentorRead, TaskReportRead
from mentor_admin_api.app.services.audit_service import AuditService


logger = logging.getLogger(__name__)


def _full_name(first_name: Optional[str], last_name: Optional[str]) -> Optional[str]:
    # Tasks outlive their creator; the creator reference is then NULL.
    if first_name is None and last_name is None:
        return None
    return f"{first_name} {last_name}"


class MentorService:
    """Service for mentor listings, task lookups and mentor removal."""

    @classmethod
    async def list_mentors(cls, page: int, limit: int) -> MentorPage:
        """Return one page of mentors.

        Pages are 1-based.  A page past the end yields an empty ``data``
        list with the usual metadata.
        """
        conn = get_connection()
        try:
            total = UserRepository.count_mentors(conn)
            rows = UserRepository.list_mentors(conn, limit=limit, offset=(page - 1) * limit)
        finally:
            conn.close()
        return MentorPage(
            meta=PageMeta.build(total=total, page=page, per_page=limit),
            data=[
                MentorRead(id=row["id"], first_name=row["first_name"], last_name=row["last_name"])
                for row in rows
            ],
        )

    @classmethod
    async def list_mentor_tasks(cls, mentor_id: int, search: Optional[str] = None) -> List[MentorTaskRead]:
        """Return the tasks assigned to a mentor, optionally filtered by text."""
        conn = get_connection()
        try:
            rows = TaskRepository.list_for_mentor(conn, mentor_id, search=search)
            return cls._shape_tasks(conn, rows)
        finally:
            conn.close()

    @classmethod
    async def search_mentor_tasks(cls, mentor_id: int, query: str) -> List[MentorTaskRead]:
        """Search tasks by ``query``.

        Returns the mentor's tasks whose title contains ``query`` and
        every task, assigned or not, whose description contains it.
        """
        conn = get_connection()
        try:
            rows = TaskRepository.search_for_mentor(conn, mentor_id, query)
            return cls._shape_tasks(conn, rows)
        finally:
            conn.close()

    @classmethod
    def _shape_tasks(cls, conn: sqlite3.Connection, rows: List[sqlite3.Row]) -> List[MentorTaskRead]:
        task_ids = [row["id"] for row in rows]
        mentors_by_task = TaskMentorRepository.list_for_tasks(conn, task_ids)
        reports_by_task = TaskRepository.reports_for_tasks(conn, task_ids)
        tasks: List[MentorTaskRead] = []
        for row in rows:
            reports = [
                TaskReportRead(
                    id=report["id"],
                    achievement=report["achievement"],
                    blocker=report["blocker"],
                    recommendation=report["recommendation"],
                    created_at=report["created_at"],
                    updated_at=report["updated_at"],
                )
                for report in reports_by_task[row["id"]]
            ]
            tasks.append(
                MentorTaskRead(
                    id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    meta=decode_meta(row["meta"]),
                    creator_user_id=row["user_id"],
                    created_by=_full_name(row["creator_first_name"], row["creator_last_name"]),
                    start_date=row["start_date"],
                    end_date=row["end_date"],
                    type_of_report=row["type_of_report"],
                    created_at=row["created_at"],
                    updated_at=row["updated_at"],
                    mentors=[
                        TaskMentorRead(id=link["id"], mentor_id=link["mentor_id"])
                        for link in mentors_by_task[row["id"]]
                    ],
                    reports=reports,
                )
            )
        return tasks

    @classmethod
    async def remove_mentor_from_task(
        cls, task_id: int, mentor_id: int, actor_id: Optional[int] = None
    ) -> None:
        """Delete the assignment of ``mentor_id`` to ``task_id``.

        Raises
        ------
        NotFoundError
            If the mentor is not assigned to the task.  Nothing is
            deleted in that case.
        """
        with transaction() as conn:
            link = TaskMentorRepository.find(conn, task_id, mentor_id)
            if link is None:
                raise NotFoundError(f"Mentor {mentor_id} is not assigned to task {task_id}")
            TaskMentorRepository.delete(conn, link["id"])
        logger.info("Mentor %s removed from task %s", mentor_id, task_id)
        await AuditService.try_log(
            user_id=actor_id,
            action="detach",
            object_type="task_mentor",
            object_id=link["id"],
            details={"task_id": task_id, "mentor_id": mentor_id},
        )

    @classmethod
    async def delete_mentor(cls, mentor_id: int, actor_id: Optional[int] = None) -> List[int]:
        """Delete a mentor and every one of its task assignments.

        All steps share one transaction: the mentor row is deleted
        first, then each assignment is deleted and the mentor is
        detached from that assignment's task.  Tasks themselves are
        kept; tasks the mentor created lose their creator reference.
        Any failure rolls back the whole unit, leaving the mentor and
        its assignments untouched.

        Returns
        -------
        List[int]
            Ids of the tasks the mentor was detached from.

        Raises
        ------
        NotFoundError
            If no user with this id has the mentor role.
        """
        with transaction() as conn:
            mentor = UserRepository.get_mentor(conn, mentor_id)
            if mentor is None:
                raise NotFoundError(f"Mentor {mentor_id} not found")
            UserRepository.delete(conn, mentor_id)
            links = TaskMentorRepository.list_for_mentor_with_tasks(conn, mentor_id)
            task_ids: List[int] = []
            for link in links:
                TaskMentorRepository.delete(conn, link["id"])
                TaskMentorRepository.detach(conn, link["task_id"], [mentor_id])
                task_ids.append(link["task_id"])
        logger.info("Mentor %s deleted, detached from %d task(s)", mentor_id, len(task_ids))
        await AuditService.try_log(
            user_id=actor_id,
            action="delete",
            object_type="mentor",
            object_id=mentor_id,
            details={"email": mentor["email"], "task_ids": task_ids},
        )
        return task_ids
