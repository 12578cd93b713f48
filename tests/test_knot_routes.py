"""
Test Knot API Routes
Tests the read-only knot endpoints and the stateless computations.
"""

import pytest
from fastapi.testclient import TestClient

from skein.server import app


@pytest.fixture
def client(seeded_path, monkeypatch):
    monkeypatch.setenv("SKEIN_DB_PATH", str(seeded_path))
    return TestClient(app)


def test_health():
    assert TestClient(app).get("/api/health").json() == {"status": "ok"}


def test_missing_db(tmp_path, monkeypatch):
    monkeypatch.setenv("SKEIN_DB_PATH", str(tmp_path / "absent.db"))
    response = TestClient(app).get("/api/knots")
    assert response.status_code == 503


def test_list(client):
    body = client.get("/api/knots").json()
    assert body["count"] == 9
    assert body["knots"][0]["name"] == "0_1"


def test_list_filters(client):
    body = client.get("/api/knots", params={"crossing_number": 6}).json()
    assert [k["name"] for k in body["knots"]] == ["6_1", "6_2", "6_3"]

    body = client.get("/api/knots", params={"name_like": "5%"}).json()
    assert [k["name"] for k in body["knots"]] == ["5_1", "5_2"]


def test_list_paging(client):
    body = client.get("/api/knots", params={"limit": 2, "offset": 1}).json()
    assert [k["name"] for k in body["knots"]] == ["3_1", "4_1"]


def test_list_rejects_bad_limit(client):
    assert client.get("/api/knots", params={"limit": 0}).status_code == 422


def test_get_knot(client):
    body = client.get("/api/knots/3_1").json()
    assert body["gauss_code"] == [1, -2, 3, -1, 2, -3]
    assert body["crossing_number"] == 3
    assert body["writhe"] == 1
    assert body["metadata"]["family"] == "(2,3)-torus"


def test_get_missing_knot(client):
    assert client.get("/api/knots/99_1").status_code == 404


def test_stats(client):
    body = client.get("/api/knots/stats").json()
    assert body["total_knots"] == 9
    assert body["min_crossings"] == 0
    assert body["max_crossings"] == 7
    assert body["crossing_distribution"]["6"] == 3


def test_invariants():
    response = TestClient(app).post(
        "/api/knots/invariants", json={"gauss_code": [4, 1, -2, 3, -1, 2, -3, -4]})
    body = response.json()
    assert body["well_formed"] is True
    assert body["crossing_number"] == 4
    assert body["simplified"] == [1, -2, 3, -1, 2, -3]
    assert len(body["gauss_hash"]) == 64


def test_invariants_rejects_zero():
    response = TestClient(app).post("/api/knots/invariants", json={"gauss_code": [1, 0, -1]})
    assert response.status_code == 422


def test_compare():
    body = TestClient(app).post(
        "/api/knots/compare",
        json={"a": [1, -2, 3, -1, 2, -3], "b": [3, -1, 2, -3, 1, -2]},
    ).json()
    assert body == {"equivalent": True, "isotopic": True, "heuristic": True}
