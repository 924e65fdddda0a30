# tests/test_health.py
from typing import Any


def test_health_check(client: Any) -> None:
    """Verify that the health endpoint reports the service as up."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_unknown_route(client: Any) -> None:
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
