"""Endpoint tests for /api/historial, /api/stats and /api/health."""

from fastapi.testclient import TestClient

from padron.main import create_app
from padron.store import RegistryStore


class TestHistory:
    """GET /api/historial."""

    def test_newest_first(self, client, store):
        store.add_validation("BANCO_AZTECA", "A", 94, "success", "192.168.1.101")
        store.add_validation("BBVA_MEXICO", "B", 87, "success")
        store.add_validation("SANTANDER_MX", "C", 42, "failed")
        body = client.get("/api/historial").json()
        assert [e["curp"] for e in body] == ["C", "B", "A"]
        assert body[2]["ipAddress"] == "192.168.1.101"
        assert body[2]["matchingPercentage"] == 94

    def test_institution_filter(self, client, store):
        store.add_validation("BANCO_AZTECA", "A", 94, "success")
        store.add_validation("BBVA_MEXICO", "B", 87, "success")
        body = client.get("/api/historial", params={"institution": "BBVA_MEXICO"}).json()
        assert [e["institution"] for e in body] == ["BBVA_MEXICO"]

    def test_validation_appears_in_history(self, client, record):
        """A fingerprint check made through the API shows up in the log."""
        client.post("/api/biometria/validar", json={"curp": record.curp, "fingerprintData": "FP_AGS_002"})
        body = client.get("/api/historial").json()
        assert body[0]["curp"] == record.curp
        assert body[0]["status"] == "success"

    def test_store_fault_is_500(self, client, store, monkeypatch):
        def boom(**kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(store, "list_validations", boom)
        resp = client.get("/api/historial")
        assert resp.status_code == 500
        assert resp.json() == {"message": "Error fetching validation history"}


class TestStats:
    """GET /api/stats."""

    def test_empty(self, client):
        assert client.get("/api/stats").json() == {
            "totalValidations": 0,
            "successfulValidations": 0,
            "failedValidations": 0,
            "successRate": 0.0,
            "totalRecords": 0,
        }

    def test_counts(self, client, store, record):
        store.add_validation("X", "A", 90, "success")
        store.add_validation("X", "B", 40, "failed")
        store.add_validation("X", "C", 40, "failed")
        body = client.get("/api/stats").json()
        assert body["totalValidations"] == 3
        assert body["successfulValidations"] == 1
        assert body["failedValidations"] == 2
        assert body["successRate"] == 33.3
        assert body["totalRecords"] == 1

    def test_store_fault_is_500(self, client, store, monkeypatch):
        def boom():
            raise RuntimeError("boom")

        monkeypatch.setattr(store, "validation_stats", boom)
        resp = client.get("/api/stats")
        assert resp.status_code == 500
        assert resp.json() == {"message": "Error fetching statistics"}


class TestAppFactory:
    """create_app wiring: health, seeding and the error body shape."""

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "healthy"
        assert body["matcher"] == "DeterministicMatcher"

    def test_seeded_demo(self):
        """A seeded app accepts the demo admin and knows the sample citizens."""
        client = TestClient(create_app(store=RegistryStore(), seed=True))
        assert client.post(
            "/api/auth/login", json={"username": "admin", "password": "Keylog100$"}
        ).status_code == 200
        resp = client.post("/api/biometria/validar", json={
            "curp": "HERJ850722MASRDL08",
            "fingerprintData": "FP_AGS_002",
        })
        assert resp.status_code == 200
        assert resp.json()["status"] == "success"
        assert client.get("/api/stats").json()["totalValidations"] == 4

    def test_unknown_route_has_message(self, client):
        """Framework 404s use the same {message} body as the routes."""
        resp = client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Not Found"}
