"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STRAVA_CLIENT_ID", "12345")
os.environ.setdefault("STRAVA_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("STRAVA_VERIFY_TOKEN", "test-verify-token")
os.environ.setdefault("STRAVA_REDIRECT_URI", "http://localhost/auth/strava/callback")
os.environ.setdefault("ADMIN_TOKEN", "test-admin")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from zoneboard.db import SessionLocal
from zoneboard.deps import get_now
from zoneboard.main import app
from zoneboard.models import Base

NOW = datetime(2026, 2, 1, tzinfo=timezone.utc)


@pytest.fixture
def db_session():
    """Session on the shared in-memory database; every table is emptied afterwards."""
    session = SessionLocal()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_now] = lambda: NOW
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer test-admin"}
