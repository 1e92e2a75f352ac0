"""SqlTaskRepository against sqlite."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from taskapi.errors import RepositoryError, TaskNotFoundError
from taskapi.models.task import Task
from taskapi.repositories.task import SqlTaskRepository, TaskRepository


@pytest.fixture
def repo(db):
    return SqlTaskRepository(db)


def test_implements_interface():
    assert issubclass(SqlTaskRepository, TaskRepository)


def test_create_assigns_id_and_default_done(repo, user):
    task = repo.create(user.id, "Write spec")
    assert task.id is not None
    assert task.user_id == user.id
    assert task.title == "Write spec"
    assert task.done is False


def test_list_all_empty(repo):
    assert repo.list_all() == []


def test_list_all_ascending(repo, user):
    created = [repo.create(user.id, t).id for t in ("one", "two", "three")]
    assert [t.id for t in repo.list_all()] == sorted(created)


def test_get_by_id_missing(repo):
    with pytest.raises(TaskNotFoundError) as exc:
        repo.get_by_id(42)
    assert exc.value.task_id == 42
    assert str(exc.value) == "task 42 not found"


def test_update_fields_single_statement(repo, user):
    task = repo.create(user.id, "old")
    assert repo.update_fields(task.id, {"title": "new", "done": True}) is True
    fresh = repo.get_by_id(task.id)
    assert (fresh.title, fresh.done) == ("new", True)


def test_update_fields_reports_missing_row(repo):
    assert repo.update_fields(7, {"done": True}) is False


def test_update_fields_empty_writes_nothing(repo, user):
    task = repo.create(user.id, "same")
    assert repo.update_fields(task.id, {}) is True
    assert repo.update_fields(999, {}) is False
    assert repo.get_by_id(task.id).title == "same"


def test_update_fields_rejects_unknown_columns(repo, user):
    task = repo.create(user.id, "x")
    with pytest.raises(ValueError):
        repo.update_fields(task.id, {"user_id": 2})


def test_set_title_and_set_done(repo, user):
    task = repo.create(user.id, "old")
    assert repo.set_title(task.id, "renamed") is True
    assert repo.set_done(task.id, True) is True
    assert repo.set_title(999, "nope") is False

    fresh = repo.get_by_id(task.id)
    assert fresh.title == "renamed"
    assert fresh.done is True


def test_delete_by_id_counts(repo, user, db):
    task_id = repo.create(user.id, "bye").id
    assert repo.delete_by_id(task_id) == 1
    assert repo.delete_by_id(task_id) == 0
    assert db.query(Task).count() == 0


def test_integrity_error_becomes_repository_error(repo, db):
    with pytest.raises(RepositoryError):
        repo.create(12345, "no such user")
    # session is usable again after the rollback
    assert repo.list_all() == []


def test_driver_error_becomes_repository_error(repo, db):
    with patch.object(db, "query", side_effect=OperationalError("SELECT", {}, Exception("down"))):
        with pytest.raises(RepositoryError) as exc:
            repo.list_all()
    assert "down" in str(exc.value)
