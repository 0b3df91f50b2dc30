"""Pytest configuration and shared fixtures."""

from typing import Iterable, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from libris.api.deps import get_db
from libris.api.main import create_app
from libris.db.base import Base
from libris.db.session import create_db_engine
import libris.db.models  # noqa: F401

from tests.factories import auth_headers, create_role, create_user


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite database file per test."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'libris-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session for arranging and inspecting data. Commit before calling the API."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def app(session_factory):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def headers_for(db_session):
    """Create a committed user holding ``grants`` and return its auth headers.

    Usage::

        headers = headers_for([("Books", "Read")])
    """

    def make(grants: Iterable[Tuple[str, str]] = (), role_name: str = None):
        grants = list(grants)
        roles = [create_role(db_session, name=role_name, grants=grants)] if grants or role_name else []
        user = create_user(db_session, roles=roles)
        db_session.commit()
        return auth_headers(user)

    return make
