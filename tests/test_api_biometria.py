"""
Endpoint tests for fingerprint validation and identity verification.

The app under test uses DeterministicMatcher, so an identical template
always scores 95.0 and mismatches follow the checksum heuristic.
"""

import random

from fastapi.testclient import TestClient

from padron import config
from padron.main import create_app
from padron.matching import SimulatedMatcher


class TestValidateFingerprint:
    """POST /api/biometria/validar: scoring, errors and the history entry."""

    def test_exact_match_succeeds(self, client, record):
        resp = client.post("/api/biometria/validar", json={
            "curp": record.curp,
            "fingerprintData": "FP_AGS_002",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["matchingPercentage"] == 95.0
        assert body["status"] == "success"
        assert body["threshold"] == 85
        assert body["record"] == {
            "curp": record.curp,
            "fullName": record.full_name,
            "ineNumber": record.ine_number,
            "rfc": record.rfc,
            "status": "active",
        }

    def test_mismatch_fails(self, client, record):
        resp = client.post("/api/biometria/validar", json={
            "curp": record.curp,
            "fingerprintData": "FP_AGS_001",
        })
        body = resp.json()
        assert resp.status_code == 200
        assert body["status"] == "failed"
        assert 30 <= body["matchingPercentage"] < 85

    def test_unknown_curp_is_404(self, client, store):
        """Unknown CURP: 404 with a zero score, and nothing is logged."""
        resp = client.post("/api/biometria/validar", json={
            "curp": "XXXX000000HXXXXX00",
            "fingerprintData": "FP",
        })
        assert resp.status_code == 404
        body = resp.json()
        assert body["matchingPercentage"] == 0
        assert body["status"] == "not_found"
        assert "message" in body
        assert store.list_validations() == []

    def test_curp_must_be_18_chars(self, client, record):
        resp = client.post("/api/biometria/validar", json={
            "curp": record.curp[:17],
            "fingerprintData": "FP_AGS_002",
        })
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid request data"

    def test_fingerprint_required(self, client, record):
        resp = client.post("/api/biometria/validar", json={"curp": record.curp})
        assert resp.status_code == 400

    def test_attempt_is_logged(self, client, store, record):
        """History stores the whole-number score and the socket peer address."""
        client.post("/api/biometria/validar", json={"curp": record.curp, "fingerprintData": "FP_AGS_002"})
        (entry,) = store.list_validations()
        assert entry.curp == record.curp
        assert entry.matching_percentage == 95
        assert entry.status == "success"
        assert entry.institution == "WEB_PORTAL"
        assert entry.ip_address == "testclient"

    def test_forwarded_header_ignored_by_default(self, client, store, record):
        """Without a trusted proxy, X-Forwarded-For does not change the logged IP."""
        client.post(
            "/api/biometria/validar",
            json={"curp": record.curp, "fingerprintData": "FP"},
            headers={"X-Forwarded-For": "203.0.113.7"},
        )
        assert store.list_validations()[0].ip_address == "testclient"

    def test_forwarded_ip_is_logged_behind_trusted_proxy(self, client, store, record, monkeypatch):
        """First hop of X-Forwarded-For is logged when PADRON_TRUST_PROXY is on."""
        monkeypatch.setattr(config, "TRUST_PROXY", True)
        client.post(
            "/api/biometria/validar",
            json={"curp": record.curp, "fingerprintData": "FP"},
            headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )
        assert store.list_validations()[0].ip_address == "203.0.113.7"

    def test_institution_from_api_key(self, client, store, record):
        store.create_institution("BBVA_MEXICO", "bbva_key_456")
        client.post(
            "/api/biometria/validar",
            json={"curp": record.curp, "fingerprintData": "FP"},
            headers={"X-API-Key": "bbva_key_456"},
        )
        assert store.list_validations()[0].institution == "BBVA_MEXICO"

    def test_inactive_institution_key_is_ignored(self, client, store, record):
        """A disabled institution's key falls back to the web portal label."""
        store.create_institution("CERRADO", "closed_key", active=False)
        client.post(
            "/api/biometria/validar",
            json={"curp": record.curp, "fingerprintData": "FP"},
            headers={"X-API-Key": "closed_key"},
        )
        assert store.list_validations()[0].institution == "WEB_PORTAL"

    def test_authorization_header_marks_api_client(self, client, store, record):
        client.post(
            "/api/biometria/validar",
            json={"curp": record.curp, "fingerprintData": "FP"},
            headers={"Authorization": "Bearer whatever"},
        )
        assert store.list_validations()[0].institution == "API_CLIENT"

    def test_simulated_matcher_range(self, store, record):
        """Identical templates under the random matcher always pass."""
        app = create_app(store=store, matcher=SimulatedMatcher(random.Random(3)), seed=False)
        client = TestClient(app)
        for _ in range(20):
            body = client.post(
                "/api/biometria/validar",
                json={"curp": record.curp, "fingerprintData": "FP_AGS_002"},
            ).json()
            # Wire value is rounded to one decimal, so a raw score just under 98 reads 98.0.
            # The half-open raw range is checked in test_matching.py.
            assert 85 <= body["matchingPercentage"] <= 98
            assert body["status"] == "success"


class TestVerifyIdentity:
    """POST /api/institucion/verificar-identidad lookups by CURP, INE or RFC."""

    def test_by_curp_without_fingerprint(self, client, store, record):
        """Lookup only: no biometric block and no history entry."""
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": record.curp,
            "identifierType": "curp",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["found"] is True
        assert body["record"]["fullName"] == record.full_name
        assert body["biometric"] is None
        assert store.list_validations() == []

    def test_by_ine(self, client, record):
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": record.ine_number,
            "identifierType": "ine",
        })
        assert resp.json()["record"]["curp"] == record.curp

    def test_by_rfc_with_fingerprint(self, client, store, record):
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": "HERJ850722M34",
            "identifierType": "rfc",
            "fingerprintData": "FP_AGS_002",
        })
        body = resp.json()
        assert body["biometric"] == {"matchingPercentage": 95.0, "status": "success", "threshold": 85}
        assert store.list_validations()[0].curp == record.curp

    def test_not_found(self, client, record):
        """The 404 message names the identifier type that was searched."""
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": "NOPE",
            "identifierType": "rfc",
        })
        assert resp.status_code == 404
        body = resp.json()
        assert body["message"] == "RFC not found in electoral registry"
        assert body["status"] == "not_found"
        assert body["found"] is False

    def test_invalid_identifier_type(self, client, record):
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": record.curp,
            "identifierType": "passport",
        })
        assert resp.status_code == 400

    def test_empty_identifier(self, client):
        resp = client.post("/api/institucion/verificar-identidad", json={
            "identifier": "",
            "identifierType": "curp",
        })
        assert resp.status_code == 400


class TestInstitutions:
    """GET /api/instituciones."""

    def test_list_hides_api_keys(self, client, store):
        store.create_institution("BANCO_AZTECA", "azteca_key_123")
        resp = client.get("/api/instituciones")
        assert resp.status_code == 200
        assert resp.json() == [{"id": 1, "name": "BANCO_AZTECA", "active": True}]
