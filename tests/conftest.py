import json
import sqlite3
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from mentor_admin_api.app.core.config import settings
from mentor_admin_api.app.core.db import ROLE_ADMIN, ROLE_MENTOR, ROLE_USER, get_connection, init_db
from mentor_admin_api.app.core.security import create_access_token
from mentor_admin_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with the schema applied."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    yield


def _insert(conn: sqlite3.Connection, sql: str, params: tuple) -> int:
    return conn.execute(sql, params).lastrowid


@pytest.fixture
def seed() -> Dict[str, int]:
    """Seed users, tasks, reports and mentor assignments.

    mentor_ada: onboarding, review
    mentor_alan: review, docs
    nobody: orphan
    """
    conn = get_connection()
    try:
        add_user = "INSERT INTO users (email, first_name, last_name, role_id) VALUES (?, ?, ?, ?)"
        ids = {
            "admin": _insert(conn, add_user, ("admin@example.com", "Grace", "Hopper", ROLE_ADMIN)),
            "mentor_ada": _insert(conn, add_user, ("ada@example.com", "Ada", "Lovelace", ROLE_MENTOR)),
            "mentor_alan": _insert(conn, add_user, ("alan@example.com", "Alan", "Turing", ROLE_MENTOR)),
            "user": _insert(conn, add_user, ("user@example.com", "Linus", "Torvalds", ROLE_USER)),
        }
        add_task = (
            "INSERT INTO tasks (title, description, meta, user_id, start_date, end_date, type_of_report) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)"
        )
        ids["onboarding"] = _insert(
            conn,
            add_task,
            ("Onboarding plan", "Weekly check-ins", json.dumps({"priority": "high"}), ids["admin"],
             "2024-01-01T09:00:00", "2024-03-01T17:00:00", "weekly"),
        )
        ids["review"] = _insert(
            conn,
            add_task,
            ("Code review", "Review pull requests", None, ids["admin"], None, None, "daily"),
        )
        ids["docs"] = _insert(
            conn,
            add_task,
            ("Docs sprint", "Prepare onboarding docs", None, ids["admin"], None, None, None),
        )
        ids["orphan"] = _insert(
            conn,
            add_task,
            ("Orphan", "Nobody is assigned to this one", None, ids["admin"], None, None, None),
        )
        add_link = "INSERT INTO task_mentors (task_id, mentor_id) VALUES (?, ?)"
        ids["link_ada_onboarding"] = _insert(conn, add_link, (ids["onboarding"], ids["mentor_ada"]))
        ids["link_ada_review"] = _insert(conn, add_link, (ids["review"], ids["mentor_ada"]))
        ids["link_alan_review"] = _insert(conn, add_link, (ids["review"], ids["mentor_alan"]))
        ids["link_alan_docs"] = _insert(conn, add_link, (ids["docs"], ids["mentor_alan"]))
        add_report = (
            "INSERT INTO task_reports (task_id, achievement, blocker, recommendation) VALUES (?, ?, ?, ?)"
        )
        _insert(conn, add_report, (ids["onboarding"], "Met the team", None, "Pair more"))
        _insert(conn, add_report, (ids["onboarding"], "Shipped first PR", "Slow CI", None))
        conn.commit()
    finally:
        conn.close()
    return ids


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def auth_headers(email: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


@pytest.fixture
def admin_headers(seed) -> Dict[str, str]:
    return auth_headers("admin@example.com")


@pytest.fixture
def mentor_headers(seed) -> Dict[str, str]:
    return auth_headers("ada@example.com")


def count_rows(table: str, where: str = "1 = 1", params: tuple = ()) -> int:
    conn = get_connection()
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table} WHERE {where}", params).fetchone()[0]
    finally:
        conn.close()
