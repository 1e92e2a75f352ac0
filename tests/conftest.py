"""Pytest fixtures: a fresh sqlite database per test, app wired to it."""

import os

# Set env vars before importing anything from taskapi
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient

from taskapi.database import Base, create_db_engine, make_session_factory
from taskapi.main import create_app
from taskapi.models.task import Task
from taskapi.models.user import User
from taskapi.routers.tasks import get_task_repository

from .fakes import FakeTaskRepository


@pytest.fixture
def engine(tmp_path):
    # file-backed so every request gets its own pooled connection
    engine = create_db_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    user = User(name="Alice", email="alice@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_task(db, user):
    def _make(title="Write spec", done=False, user_id=None):
        task = Task(user_id=user_id or user.id, title=title, done=done)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    return _make


@pytest.fixture
def app(engine):
    return create_app(engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_repo():
    return FakeTaskRepository()


@pytest.fixture
def fake_client(app, fake_repo):
    app.dependency_overrides[get_task_repository] = lambda: fake_repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
