"""
Queries against the ``users`` table.
"""

import sqlite3
from typing import List, Optional

from mentor_admin_api.app.core.db import ROLE_MENTOR


class UserRepository:
    """User store.  Every method takes the connection to run on."""

    @classmethod
    def count_mentors(cls, conn: sqlite3.Connection) -> int:
        row = conn.execute(
            "SELECT COUNT(*) AS count FROM users WHERE role_id = ?",
            (ROLE_MENTOR,),
        ).fetchone()
        return row["count"]

    @classmethod
    def list_mentors(cls, conn: sqlite3.Connection, limit: int, offset: int) -> List[sqlite3.Row]:
        """Return one page of mentors projected to id and names, ordered by id."""
        return conn.execute(
            """
            SELECT id, first_name, last_name
            FROM users
            WHERE role_id = ?
            ORDER BY id
            LIMIT ? OFFSET ?
            """,
            (ROLE_MENTOR, limit, offset),
        ).fetchall()

    @classmethod
    def get_mentor(cls, conn: sqlite3.Connection, user_id: int) -> Optional[sqlite3.Row]:
        """Return the user with ``user_id`` if it has the mentor role."""
        return conn.execute(
            "SELECT id, email, first_name, last_name, role_id FROM users WHERE id = ? AND role_id = ?",
            (user_id, ROLE_MENTOR),
        ).fetchone()

    @classmethod
    def delete(cls, conn: sqlite3.Connection, user_id: int) -> int:
        cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount
