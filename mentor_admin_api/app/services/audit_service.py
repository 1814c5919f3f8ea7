"""
Audit service for recording and querying administrative actions.

This module writes audit events to the ``audit_logs`` table and reads
them back as ``AuditLogRead`` records with filters and pagination.
Mentor deletions and mentor removals from tasks are recorded here once
their transaction has committed.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from mentor_admin_api.app.core.db import get_connection
from mentor_admin_api.app.schemas.audit import AuditLogRead


logger = logging.getLogger(__name__)


class AuditService:
    """Service class for writing and retrieving audit logs."""

    @classmethod
    async def log(
        cls,
        user_id: Optional[int],
        action: str,
        object_type: str,
        object_id: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        user_id : Optional[int]
            ID of the user performing the action.  May be ``None`` for
            system‑initiated actions.
        action : str
            Short description of the action (e.g. "delete", "detach").
        object_type : str
            Type of object affected (e.g. "mentor", "task_mentor").
        object_id : Optional[int]
            Primary key of the affected object, if applicable.
        details : Optional[dict]
            Additional structured data about the action, stored as JSON.
        """
        conn = get_connection()
        try:
            details_json = json.dumps(details) if details else None
            conn.execute(
                """
                INSERT INTO audit_logs (user_id, action, object_type, object_id, details)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, action, object_type, object_id, details_json),
            )
            conn.commit()
        finally:
            conn.close()

    @classmethod
    async def try_log(cls, *args: Any, **kwargs: Any) -> None:
        """Like ``log`` but never raises.

        The action being recorded has already been committed, so a
        failing audit write is reported in the application log only.
        """
        try:
            await cls.log(*args, **kwargs)
        except Exception:
            logger.warning("Failed to write audit record %s %s", args, kwargs, exc_info=True)

    @classmethod
    async def list_logs(
        cls,
        user_id: Optional[int] = None,
        object_type: Optional[str] = None,
        object_id: Optional[int] = None,
        action: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditLogRead]:
        """Return audit records matching every given filter, newest first.

        Filters left as ``None`` are not applied.  ``object_type`` and
        ``object_id`` together select the history of one mentor or one
        assignment.
        """
        filters = {
            "user_id": user_id,
            "object_type": object_type,
            "object_id": object_id,
            "action": action,
        }
        applied = {column: value for column, value in filters.items() if value is not None}
        sql = "SELECT id, user_id, action, object_type, object_id, timestamp, details FROM audit_logs"
        if applied:
            sql += " WHERE " + " AND ".join(f"{column} = ?" for column in applied)
        sql += " ORDER BY timestamp DESC, id DESC LIMIT ? OFFSET ?"
        conn = get_connection()
        try:
            rows = conn.execute(sql, (*applied.values(), limit, offset)).fetchall()
        finally:
            conn.close()
        return [AuditLogRead(**dict(row)) for row in rows]
