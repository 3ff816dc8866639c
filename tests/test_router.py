import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_payload, pokeapi_handler
from pokedex.config import Settings
from pokedex.main import create_app


def make_client(settings, overrides=None, **changes):
    if changes:
        settings = Settings.from_overrides(**{**settings.to_dict(), **changes})
    app = create_app(settings, transport=httpx.MockTransport(pokeapi_handler(overrides)))
    return TestClient(app)


@pytest.fixture
def client(settings):
    with make_client(settings, last_id=10) as c:
        yield c


def test_health_check(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "records": 0, "captured": 0}


def test_health_check_counts_captured(client):
    client.get("/api/catalog/records")
    client.post("/api/catalog/records/4/toggle")
    client.post("/api/catalog/records/6/toggle")
    assert client.get("/").json() == {"status": "ok", "records": 10, "captured": 2}


def test_first_listing_fetches_catalogue(client):
    resp = client.get("/api/catalog/records")
    assert resp.status_code == 200
    records = resp.json()
    assert sorted(r["id"] for r in records) == list(range(1, 11))
    assert all(r["selected"] is False for r in records)
    assert client.get("/").json()["records"] == 10


def test_listing_is_not_refetched(client):
    client.get("/api/catalog/records")
    resp = client.post("/api/catalog/load")
    assert resp.json() == {"status": "already_loaded", "count": 10, "report": None}


def test_load_endpoint_reports_failures(settings):
    overrides = {7: make_payload(7, thumbnail=None)}
    with make_client(settings, overrides, last_id=10) as c:
        body = c.post("/api/catalog/load").json()

    assert body["status"] == "loaded"
    assert body["count"] == 9
    assert list(body["report"]["failed"]) == ["7"]


def test_get_record_and_404(client):
    client.get("/api/catalog/records")
    assert client.get("/api/catalog/records/6").json()["categories"] == ["fire", "flying"]
    assert client.get("/api/catalog/records/999").status_code == 404


def test_toggle_round_trip(client):
    client.get("/api/catalog/records")

    on = client.post("/api/catalog/records/4/toggle")
    assert on.status_code == 200
    assert on.json()["selected"] is True

    off = client.post("/api/catalog/records/4/toggle")
    assert off.json()["selected"] is False


def test_toggle_unknown_record_is_404(client):
    client.get("/api/catalog/records")
    resp = client.post("/api/catalog/records/999/toggle")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Record not found"


def test_stats_follow_toggles(client):
    client.get("/api/catalog/records")

    stats = client.get("/api/catalog/stats").json()
    assert stats["captured"] == 0
    assert stats["total"] == 10
    assert stats["catalog"]["counts"]["Fogo"] == 2
    assert stats["selected"]["counts"] == {}
    assert len(stats["selected"]["rows"]) == 18
    assert all(row["count"] == 0 for row in stats["selected"]["rows"])

    client.post("/api/catalog/records/6/toggle")
    stats = client.get("/api/catalog/stats").json()
    assert stats["captured"] == 1
    assert stats["selected"]["counts"] == {"Fogo": 1, "Voador": 1}


def test_stats_before_load_are_empty(client):
    stats = client.get("/api/catalog/stats").json()
    assert stats["captured"] == 0
    assert stats["catalog"]["counts"] == {}


def test_records_carry_display_name(settings):
    overrides = {6: make_payload(6, name="charizard")}
    with make_client(settings, overrides, last_id=10) as c:
        records = {r["id"]: r for r in c.get("/api/catalog/records").json()}
        single = c.get("/api/catalog/records/6").json()

    assert records[6]["display_name"] == "Charizard"
    assert records[1]["display_name"] == "Mon-1"
    assert single["display_name"] == "Charizard"
