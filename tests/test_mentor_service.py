import asyncio
import sqlite3

import pytest

from conftest import count_rows
from mentor_admin_api.app.core.db import get_connection, transaction
from mentor_admin_api.app.core.exceptions import NotFoundError
from mentor_admin_api.app.repositories.task_mentor_repository import TaskMentorRepository
from mentor_admin_api.app.repositories.task_repository import TaskRepository, decode_meta, like_pattern
from mentor_admin_api.app.repositories.user_repository import UserRepository
from mentor_admin_api.app.services.audit_service import AuditService
from mentor_admin_api.app.services.mentor_service import MentorService


def test_delete_mentor_returns_detached_tasks(seed):
    task_ids = asyncio.run(MentorService.delete_mentor(seed["mentor_ada"]))

    assert sorted(task_ids) == sorted([seed["onboarding"], seed["review"]])
    assert count_rows("users", "id = ?", (seed["mentor_ada"],)) == 0
    assert count_rows("task_mentors", "mentor_id = ?", (seed["mentor_ada"],)) == 0
    assert count_rows("tasks") == 4


def test_delete_mentor_unknown_raises_not_found(seed):
    with pytest.raises(NotFoundError):
        asyncio.run(MentorService.delete_mentor(9999))


def test_delete_mentor_keeps_everything_when_detach_fails(seed, monkeypatch):
    def broken_detach(cls, conn, task_id, mentor_ids):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(TaskMentorRepository, "detach", classmethod(broken_detach))

    with pytest.raises(sqlite3.OperationalError):
        asyncio.run(MentorService.delete_mentor(seed["mentor_ada"]))
    assert count_rows("users", "id = ?", (seed["mentor_ada"],)) == 1
    assert count_rows("task_mentors", "mentor_id = ?", (seed["mentor_ada"],)) == 2


def test_commit_refuses_dangling_assignments(seed):
    # Removing a mentor while its assignments remain violates the deferred
    # foreign key at commit time.
    with pytest.raises(sqlite3.IntegrityError):
        with transaction() as conn:
            UserRepository.delete(conn, seed["mentor_ada"])
    assert count_rows("users", "id = ?", (seed["mentor_ada"],)) == 1


def test_transaction_blocks_concurrent_writer(seed, monkeypatch):
    from mentor_admin_api.app.core.config import settings

    monkeypatch.setattr(settings, "database_timeout", 0.1)
    with transaction() as conn:
        UserRepository.get_mentor(conn, seed["mentor_ada"])
        with pytest.raises(sqlite3.OperationalError):
            asyncio.run(MentorService.delete_mentor(seed["mentor_ada"]))
    assert count_rows("users", "id = ?", (seed["mentor_ada"],)) == 1


def test_remove_mentor_from_task_not_assigned(seed):
    with pytest.raises(NotFoundError):
        asyncio.run(MentorService.remove_mentor_from_task(seed["orphan"], seed["mentor_ada"]))


def test_remove_mentor_from_task_survives_audit_failure(seed, monkeypatch):
    async def broken_log(cls, *args, **kwargs):
        raise sqlite3.OperationalError("no such table: audit_logs")

    monkeypatch.setattr(AuditService, "log", classmethod(broken_log))

    asyncio.run(MentorService.remove_mentor_from_task(seed["onboarding"], seed["mentor_ada"]))
    assert count_rows("task_mentors", "id = ?", (seed["link_ada_onboarding"],)) == 0


def test_list_mentors_meta(seed):
    page = asyncio.run(MentorService.list_mentors(page=1, limit=5))
    assert page.meta.total == 2
    assert page.meta.last_page == 1
    assert [m.first_name for m in page.data] == ["Ada", "Alan"]


def test_list_mentors_without_mentors(database):
    page = asyncio.run(MentorService.list_mentors(page=1, limit=10))
    assert page.meta.total == 0
    assert page.meta.last_page == 1
    assert page.data == []


def test_list_mentor_tasks_unknown_mentor_is_empty(seed):
    assert asyncio.run(MentorService.list_mentor_tasks(9999)) == []


def test_detach_ignores_unassigned_mentors(seed):
    conn = get_connection()
    try:
        removed = TaskMentorRepository.detach(conn, seed["review"], [seed["mentor_ada"], 9999])
        conn.commit()
    finally:
        conn.close()
    assert removed == 1
    assert count_rows("task_mentors", "task_id = ?", (seed["review"],)) == 1


def test_reports_for_tasks_includes_tasks_without_reports(seed):
    conn = get_connection()
    try:
        grouped = TaskRepository.reports_for_tasks(conn, [seed["onboarding"], seed["review"]])
        assert TaskRepository.reports_for_tasks(conn, []) == {}
    finally:
        conn.close()
    assert len(grouped[seed["onboarding"]]) == 2
    assert grouped[seed["review"]] == []


@pytest.mark.parametrize(
    "term, pattern",
    [
        ("plan", "%plan%"),
        ("50%", "%50\\%%"),
        ("a_b", "%a\\_b%"),
        ("c:\\tmp", "%c:\\\\tmp%"),
    ],
)
def test_like_pattern_escapes_wildcards(term, pattern):
    assert like_pattern(term) == pattern


def test_decode_meta():
    assert decode_meta(None) is None
    assert decode_meta('{"a": 1}') == {"a": 1}
    assert decode_meta("free text") == "free text"
