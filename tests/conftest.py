"""Shared fixtures: in-memory database, API client and users."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from backend.api.deps import get_narrator
from backend.database import build_engine, create_db_and_tables, get_session
from backend.main import app
from backend.models.user import User
from backend.services.auth import hash_password
from backend.services.insights import InsightNarrator, TextGenerator


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session):
    def _make_user(email: str = "trader@example.com") -> User:
        user = User(email=email, hashed_password=hash_password("secret123"))
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def generator():
    return AsyncMock(spec=TextGenerator)


@pytest.fixture
def client(engine, generator):
    # Lifespan is not run; the test engine and narrator are injected instead.
    narrator = InsightNarrator(generator, timeout_seconds=1.0)

    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_narrator] = lambda: narrator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    def _auth_headers(email: str = "trader@example.com") -> dict:
        resp = client.post("/api/auth/register", json={"email": email, "password": "secret123"})
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _auth_headers
