import importlib.util
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from helpdesk.config import Settings
from helpdesk.main import create_app

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "smoke_check.py"


@pytest.fixture
def smoke():
    spec = importlib.util.spec_from_file_location("smoke_check", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _route_requests_through(monkeypatch, smoke, client):
    monkeypatch.setattr(
        smoke, "requests", SimpleNamespace(get=client.get, post=client.post, put=client.put)
    )


def test_smoke_check_passes_on_id_keyed_deployment(client, smoke, monkeypatch):
    _route_requests_through(monkeypatch, smoke, client)
    assert smoke.run_checks("") == 0


def test_smoke_check_passes_on_code_keyed_deployment(tmp_path, smoke, monkeypatch):
    settings = Settings(db_url=f"sqlite:///{tmp_path / 'bycode.db'}", ticket_lookup_key="ticket_id")
    with TestClient(create_app(settings)) as c:
        _route_requests_through(monkeypatch, smoke, c)
        assert smoke.run_checks("", by_code=True) == 0
        # Numeric keys don't resolve on this deployment: fetch, status, comment and list fail
        assert smoke.run_checks("", by_code=False) == 4
