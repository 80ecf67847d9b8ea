import os
import tempfile
from pathlib import Path

# Keep the app's import-time table creation away from the developer database.
os.environ.setdefault("DATABASE_URL", f"sqlite:///{Path(tempfile.mkdtemp()) / 'students_test.db'}")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from student_records.database import create_db_and_tables, get_session, make_engine
from student_records.main import app as api_app
from student_records.frontend.client import StudentApiClient
from student_records.frontend.main import app as frontend_app, get_api_client


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test."""
    eng = make_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def api(engine):
    """TestClient for the record API bound to the per-test database."""
    def _session():
        with Session(engine) as session:
            yield session

    api_app.dependency_overrides[get_session] = _session
    yield TestClient(api_app)
    api_app.dependency_overrides.clear()


def _frontend_for(transport: httpx.AsyncBaseTransport) -> TestClient:
    client = StudentApiClient(httpx.AsyncClient(transport=transport, base_url="http://studentapi:8080/"))
    frontend_app.dependency_overrides[get_api_client] = lambda: client
    return TestClient(frontend_app, follow_redirects=False)


@pytest.fixture
def frontend(api):
    """Front end wired to the real record API through an in-process transport."""
    yield _frontend_for(httpx.ASGITransport(app=api_app))
    frontend_app.dependency_overrides.clear()


@pytest.fixture
def frontend_with():
    """Build a front end whose upstream is a `httpx.MockTransport` handler.

    Returns `(client, calls)`; `calls` collects every outbound request.
    """
    def _build(handler):
        calls = []

        def _recording(request: httpx.Request):
            calls.append(request)
            return handler(request)

        return _frontend_for(httpx.MockTransport(_recording)), calls

    yield _build
    frontend_app.dependency_overrides.clear()
