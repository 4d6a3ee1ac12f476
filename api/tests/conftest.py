import pytest
from fastapi.testclient import TestClient

from helpdesk.config import Settings
from helpdesk.main import create_app


@pytest.fixture(scope="function")
def settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(db_url=f"sqlite:///{tmp_path / 'helpdesk.db'}")


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app):
    """
    TestClient running the real lifespan, so the database is migrated through
    the Alembic revisions before the first request.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def db_session(client, app):
    """Direct session on the same database the client talks to."""
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def ticket_payload():
    return {
        "employee_id": "VPPL07",
        "employee_name": "John Doe",
        "employee_email": "john.doe@venturebiz.in",
        "department": "Finance",
        "priority": "High",
        "issue_type": "Hardware",
        "description": "Laptop does not boot after the latest update.",
    }


@pytest.fixture
def create_ticket(client, ticket_payload):
    def _create(**overrides):
        r = client.post("/api/tickets", json={**ticket_payload, **overrides})
        assert r.status_code == 201, r.text
        return r.json()
    return _create
