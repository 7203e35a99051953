"""
Tests for the HTTP surface, run against an in-memory store.
"""

from fastapi.testclient import TestClient

from origins_api.main import app
from origins_api.storage import MemoryStorage
from origins_api.store import RegistrationStore, get_store

from conftest import StepClock


class TestRegister:

    def test_register_returns_stored_record(self, client, store):
        resp = client.post("/v1/register", json={"country": "Ghana", "name": "Sarah", "message": "Hi"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["country"] == "Ghana"
        assert body["name"] == "Sarah"
        assert body["message"] == "Hi"
        assert body["timestamp"].endswith("Z")
        assert store.list()[-1].id == body["id"]

    def test_defaults_to_anonymous(self, client):
        body = client.post("/v1/register", json={"country": "Kenya"}).json()
        assert body["name"] == "Anonymous"
        assert body["message"] == ""

    def test_blank_country_rejected(self, client, store):
        assert client.post("/v1/register", json={"country": "   "}).status_code == 422
        assert client.post("/v1/register", json={}).status_code == 422
        assert store.list() == []

    def test_unknown_country_accepted(self, client):
        assert client.post("/v1/register", json={"country": "Wakanda"}).status_code == 201


class TestRegistrations:

    def test_insertion_order(self, client):
        for country in ["Ghana", "Kenya", "Egypt"]:
            client.post("/v1/register", json={"country": country})
        countries = [r["country"] for r in client.get("/v1/registrations").json()]
        assert countries == ["Nigeria", "Ghana", "Kenya", "Egypt"]

    def test_limit_returns_newest_first(self, client):
        for country in ["Ghana", "Kenya", "Egypt"]:
            client.post("/v1/register", json={"country": country})
        countries = [r["country"] for r in client.get("/v1/registrations?limit=2").json()]
        assert countries == ["Egypt", "Kenya"]

    def test_invalid_limit(self, client):
        assert client.get("/v1/registrations?limit=0").status_code == 422


class TestDashboard:

    def test_empty_store(self, client):
        body = client.get("/v1/dashboard").json()
        assert body["stats"]["total_count"] == 0
        assert body["top_countries"] == []
        assert body["top_empty_text"] == "No registrations yet"

    def test_reflects_registrations(self, client):
        for country in ["Nigeria", "Nigeria", "Ghana", "Ghana", "Kenya"]:
            client.post("/v1/register", json={"country": country})
        body = client.get("/v1/dashboard?top=2&recent=1").json()
        # The seed registration is Nigeria too.
        assert body["stats"]["total_count"] == 6
        assert body["stats"]["unique_country_count"] == 3
        assert [e["country"] for e in body["top_countries"]] == ["Nigeria", "Ghana"]
        assert [e["count"] for e in body["top_countries"]] == [3, 2]
        assert body["recent"][0]["country"] == "Kenya"
        assert body["grid"][0]["color"] == "rgb(27, 94, 32)"

    def test_malformed_blob_reads_as_empty(self, client, storage):
        storage.set_item("africaMapData", "{{{")
        assert client.get("/v1/dashboard").json()["stats"]["total_count"] == 0


class TestCountries:

    def test_country_detail(self, client):
        client.post("/v1/register", json={"country": "Ghana"})
        body = client.get("/v1/countries/Ghana").json()
        assert body["count"] == 1
        assert body["label"] == "Ghana: 1 participant"

    def test_unregistered_country(self, client):
        body = client.get("/v1/countries/Chad").json()
        assert body["count"] == 0
        assert body["intensity"] == 0.0


class TestKioskPage:

    def test_html(self, client):
        client.post("/v1/register", json={"country": "Ghana", "name": "Sarah"})
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'id="map-container"' in resp.text
        assert "Sarah" in resp.text

    def test_refresh_override(self, client):
        html = client.get("/?refresh=60").text
        assert 'content="60"' in html
        assert 'href="/?refresh=60"' in html


class TestHealth:

    def test_health(self, client):
        client.post("/v1/register", json={"country": "Ghana"})
        body = client.get("/v1/health").json()
        assert body["status"] == "healthy"
        assert body["registrations_stored"] == 2
        assert body["storage_key"] == "africaMapData"


class TestStartupSeeding:

    def test_startup_seeds_then_reuses(self):
        store = RegistrationStore(MemoryStorage(), clock=StepClock())
        app.dependency_overrides[get_store] = lambda: store
        try:
            with TestClient(app):
                pass
            assert len(store.list()) == 1
            store.register("Ghana")
            with TestClient(app):
                pass
            assert [r.country for r in store.list()] == ["Nigeria", "Ghana"]
        finally:
            app.dependency_overrides.clear()
