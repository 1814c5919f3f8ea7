"""
Queries against the ``tasks`` and ``task_reports`` tables.

Task rows are returned with the creator's first and last name joined
in (``creator_first_name``, ``creator_last_name``).  Reports are fetched
for a whole result set in one query with ``reports_for_tasks``.

Search terms are matched as literal substrings: ``%``, ``_`` and the
escape character itself are escaped before being wrapped in ``%...%``.
"""

import json
import sqlite3
from typing import Any, Dict, Iterable, List, Optional


_TASK_COLUMNS = """
    t.id, t.title, t.description, t.meta, t.user_id, t.start_date, t.end_date,
    t.type_of_report, t.created_at, t.updated_at,
    u.first_name AS creator_first_name, u.last_name AS creator_last_name
"""


def like_pattern(term: str) -> str:
    """Wrap ``term`` in ``%`` for a substring ``LIKE ... ESCAPE '\\'``."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def decode_meta(raw: Optional[str]) -> Any:
    """Decode the JSON ``meta`` column, keeping non-JSON text as is."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _placeholders(values: List[Any]) -> str:
    return ", ".join("?" for _ in values)


class TaskRepository:
    """Task store.  Every method takes the connection to run on."""

    @classmethod
    def list_for_mentor(
        cls,
        conn: sqlite3.Connection,
        mentor_id: int,
        search: Optional[str] = None,
    ) -> List[sqlite3.Row]:
        """Return tasks assigned to ``mentor_id``.

        When ``search`` is given, only tasks whose title or description
        contains it (case-insensitively) are returned.  Both conditions
        are scoped to the mentor's tasks.
        """
        sql = f"""
            SELECT {_TASK_COLUMNS}
            FROM tasks t
            LEFT JOIN users u ON u.id = t.user_id
            WHERE EXISTS (
                SELECT 1 FROM task_mentors tm WHERE tm.task_id = t.id AND tm.mentor_id = ?
            )
        """
        params: List[Any] = [mentor_id]
        if search:
            # Both sides go through casefold() so non-ASCII text folds too.
            pattern = like_pattern(search)
            sql += """
              AND (casefold(t.title) LIKE casefold(?) ESCAPE '\\'
                   OR casefold(COALESCE(t.description, '')) LIKE casefold(?) ESCAPE '\\')
            """
            params.extend([pattern, pattern])
        sql += " ORDER BY t.id"
        return conn.execute(sql, tuple(params)).fetchall()

    @classmethod
    def search_for_mentor(
        cls,
        conn: sqlite3.Connection,
        mentor_id: int,
        query: str,
    ) -> List[sqlite3.Row]:
        """Return tasks of ``mentor_id`` matching ``query`` by title, or any
        task matching it by description.

        The description branch is deliberately not scoped to the mentor:
        ``(assigned AND title LIKE q) OR description LIKE q``.
        """
        pattern = like_pattern(query)
        sql = f"""
            SELECT {_TASK_COLUMNS}
            FROM tasks t
            LEFT JOIN users u ON u.id = t.user_id
            WHERE (
                EXISTS (
                    SELECT 1 FROM task_mentors tm WHERE tm.task_id = t.id AND tm.mentor_id = ?
                )
                AND t.title LIKE ? ESCAPE '\\'
            )
            OR t.description LIKE ? ESCAPE '\\'
            ORDER BY t.id
        """
        return conn.execute(sql, (mentor_id, pattern, pattern)).fetchall()

    @classmethod
    def reports_for_tasks(
        cls, conn: sqlite3.Connection, task_ids: Iterable[int]
    ) -> Dict[int, List[sqlite3.Row]]:
        """Return reports grouped by task id, in id order.

        Every requested task id is present in the result, mapped to an
        empty list when the task has no reports.
        """
        ids = list(task_ids)
        grouped: Dict[int, List[sqlite3.Row]] = {task_id: [] for task_id in ids}
        if not ids:
            return grouped
        rows = conn.execute(
            f"""
            SELECT id, task_id, achievement, blocker, recommendation, created_at, updated_at
            FROM task_reports
            WHERE task_id IN ({_placeholders(ids)})
            ORDER BY id
            """,
            tuple(ids),
        ).fetchall()
        for row in rows:
            grouped[row["task_id"]].append(row)
        return grouped
