"""
Queries against the ``task_mentors`` association table.

A row in ``task_mentors`` is the only record of a mentor being
assigned to a task.  Rows are created elsewhere; this repository reads
them and removes them.
"""

import sqlite3
from typing import Dict, Iterable, List, Optional


class TaskMentorRepository:
    """Task-mentor association store.  Every method takes the connection to run on."""

    @classmethod
    def find(cls, conn: sqlite3.Connection, task_id: int, mentor_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT id, task_id, mentor_id FROM task_mentors WHERE task_id = ? AND mentor_id = ?",
            (task_id, mentor_id),
        ).fetchone()

    @classmethod
    def list_for_mentor_with_tasks(cls, conn: sqlite3.Connection, mentor_id: int) -> List[sqlite3.Row]:
        """Return the mentor's associations with their task's id and title joined in."""
        return conn.execute(
            """
            SELECT tm.id, tm.task_id, tm.mentor_id, t.title AS task_title
            FROM task_mentors tm
            JOIN tasks t ON t.id = tm.task_id
            WHERE tm.mentor_id = ?
            ORDER BY tm.id
            """,
            (mentor_id,),
        ).fetchall()

    @classmethod
    def list_for_tasks(
        cls, conn: sqlite3.Connection, task_ids: Iterable[int]
    ) -> Dict[int, List[sqlite3.Row]]:
        """Return associations grouped by task id.

        Every requested task id is present in the result.
        """
        ids = list(task_ids)
        grouped: Dict[int, List[sqlite3.Row]] = {task_id: [] for task_id in ids}
        if not ids:
            return grouped
        placeholders = ", ".join("?" for _ in ids)
        rows = conn.execute(
            f"SELECT id, task_id, mentor_id FROM task_mentors WHERE task_id IN ({placeholders}) ORDER BY id",
            tuple(ids),
        ).fetchall()
        for row in rows:
            grouped[row["task_id"]].append(row)
        return grouped

    @classmethod
    def delete(cls, conn: sqlite3.Connection, task_mentor_id: int) -> int:
        cursor = conn.execute("DELETE FROM task_mentors WHERE id = ?", (task_mentor_id,))
        return cursor.rowcount

    @classmethod
    def detach(cls, conn: sqlite3.Connection, task_id: int, mentor_ids: Iterable[int]) -> int:
        """Remove the given mentors from a task's assignments.

        Returns the number of association rows removed; mentors that are
        not assigned to the task are ignored.
        """
        ids = list(mentor_ids)
        if not ids:
            return 0
        placeholders = ", ".join("?" for _ in ids)
        cursor = conn.execute(
            f"DELETE FROM task_mentors WHERE task_id = ? AND mentor_id IN ({placeholders})",
            (task_id, *ids),
        )
        return cursor.rowcount
