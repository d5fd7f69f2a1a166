"""
Tests for the stateless offset endpoints.

These tests use FastAPI's TestClient to simulate requests against the
application without running a real server.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add the backend directory to sys.path so we can import the app
sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.main import app  # type: ignore


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def _points(*coords):
    return [{"x": x, "y": y} for x, y in coords]


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_offset_straight_line(client: TestClient) -> None:
    body = {
        "points": _points((0.0, 0.0), (10.0, 0.0)),
        "options": {"offset": 5.0, "smoothFactor": 0.0},
    }
    resp = client.post("/api/offset", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["points"]) == 2
    for p, x in zip(data["points"], (0.0, 10.0)):
        assert p["x"] == pytest.approx(x, abs=1e-9)
        assert p["y"] == pytest.approx(5.0)
    meta = data["metadata"]
    assert meta["inputPoints"] == 2
    assert meta["outputPoints"] == 2
    assert meta["joinStyle"] == "round"


def test_offset_inner_turn(client: TestClient) -> None:
    body = {
        "points": _points((0.0, 0.0), (10.0, 0.0), (10.0, 10.0)),
        "options": {"offset": 2.0, "smoothFactor": 0.0},
    }
    data = client.post("/api/offset", json=body).json()
    coords = [(p["x"], p["y"]) for p in data["points"]]
    assert [c for p in coords for c in p] == pytest.approx([0.0, 2.0, 8.0, 2.0, 8.0, 10.0], abs=1e-9)


def test_zero_offset_passes_points_through(client: TestClient) -> None:
    points = _points((0.0, 0.0), (5.0, 0.01), (10.0, 0.0))
    resp = client.post("/api/offset", json={"points": points})
    assert resp.status_code == 200
    assert resp.json()["points"] == points


def test_unknown_join_style_is_a_bad_request(client: TestClient) -> None:
    body = {
        "points": _points((0.0, 0.0), (10.0, 0.0)),
        "options": {"offset": 1.0, "joinStyle": "miter"},
    }
    resp = client.post("/api/offset", json=body)
    assert resp.status_code == 400
    assert "miter" in resp.json()["detail"]


def test_negative_smooth_factor_is_rejected(client: TestClient) -> None:
    body = {
        "points": _points((0.0, 0.0), (10.0, 0.0)),
        "options": {"offset": 1.0, "smoothFactor": -1.0},
    }
    assert client.post("/api/offset", json=body).status_code == 422


def test_offset_parts(client: TestClient) -> None:
    body = {
        "parts": [
            _points((0.0, 0.0), (10.0, 0.0)),
            _points((0.0, 0.0), (0.0, 10.0)),
        ],
        "options": {"offset": 1.0, "smoothFactor": 0.0},
    }
    resp = client.post("/api/offset/parts", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["metadata"]["totalParts"] == 2
    assert data["metadata"]["totalPoints"] == 4
    assert [p["y"] for p in data["parts"][0]] == pytest.approx([1.0, 1.0])
    assert [p["x"] for p in data["parts"][1]] == pytest.approx([-1.0, -1.0])
