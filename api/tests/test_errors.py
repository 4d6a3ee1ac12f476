import logging

from fastapi.testclient import TestClient
from sqlalchemy import text

from helpdesk import store

INTERNAL_ERROR = {"error": "Internal Server Error", "code": "PersistenceError"}


def test_database_failure_is_generic_500(client, create_ticket, db_session, caplog):
    """A broken datastore surfaces as the generic JSON 500 and is logged with detail."""
    t = create_ticket()
    db_session.execute(text("DROP TABLE comments"))
    db_session.commit()

    with caplog.at_level(logging.ERROR, logger="helpdesk.main"):
        r = client.get(f"/api/tickets/{t['id']}/comments")

    assert r.status_code == 500
    assert r.json() == INTERNAL_ERROR
    assert "comments" not in r.text
    assert "database error" in caplog.text
    assert "no such table" in caplog.text


def test_unexpected_error_is_generic_500(app, monkeypatch, caplog):
    """Anything that is not a helpdesk or database error still gets the JSON 500."""
    def boom(db):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(store, "list_tickets", boom)

    with TestClient(app, raise_server_exceptions=False) as c:
        with caplog.at_level(logging.ERROR, logger="helpdesk.main"):
            r = c.get("/api/tickets")

    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == INTERNAL_ERROR
    assert "secret internals" not in r.text
    assert "unhandled error" in caplog.text
