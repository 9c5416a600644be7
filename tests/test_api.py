"""Tests for the identifier JSON API and the application entry point."""

from __future__ import annotations

from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portale.api.routes import get_registry, get_today, router
from portale.decoders.cadastral import CadastralRegistry


@pytest.fixture()
def client(registry: CadastralRegistry) -> TestClient:
    """Test client with just the API router, a fixture registry and a fixed date."""
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_today] = lambda: date(2024, 5, 1)
    return TestClient(app)


class TestCodiceFiscaleRoute:
    def test_valid(self, client: TestClient) -> None:
        resp = client.get("/api/codice-fiscale/RSSMRA80A01H501U")
        assert resp.status_code == 200
        body = resp.json()
        assert body["valid"] is True
        assert body["decoded"] == {"birth_date": "01/01/1980", "sex": "M", "cadastral_code": "H501"}
        assert body["birthplace_label"] == "Roma (RM)"
        assert body["birthplace"]["cap"] == "00118"

    def test_wrong_checksum_normalized(self, client: TestClient) -> None:
        body = client.get("/api/codice-fiscale/rssmra80a01h501a").json()
        assert body["codice_fiscale"] == "RSSMRA80A01H501A"
        assert body["valid"] is False
        assert body["decoded"]["birth_date"] == "01/01/1980"

    def test_century_uses_injected_date(self, client: TestClient) -> None:
        body = client.get("/api/codice-fiscale/VRDGPP24M15A944D").json()
        assert body["decoded"]["birth_date"] == "15/08/2024"

    def test_malformed(self, client: TestClient) -> None:
        body = client.get("/api/codice-fiscale/SHORT").json()
        assert body["valid"] is False
        assert body["decoded"] is None
        assert body["birthplace"] is None


class TestPartitaIvaRoute:
    def test_valid(self, client: TestClient) -> None:
        resp = client.get("/api/partita-iva/01234567897")
        assert resp.status_code == 200
        assert resp.json() == {"partita_iva": "01234567897", "valid": True}

    def test_invalid_with_prefix(self, client: TestClient) -> None:
        assert client.get("/api/partita-iva/IT01234567890").json() == {
            "partita_iva": "01234567890",
            "valid": False,
        }


class TestComuniRoutes:
    def test_search(self, client: TestClient) -> None:
        resp = client.get("/api/comuni", params={"q": "monz"})
        assert resp.status_code == 200
        assert [c["codice"] for c in resp.json()] == ["F704", "C895"]

    def test_search_limit(self, client: TestClient) -> None:
        resp = client.get("/api/comuni", params={"q": "mil", "limit": 1})
        assert [c["nome"] for c in resp.json()] == ["Milano"]

    def test_search_limit_out_of_range(self, client: TestClient) -> None:
        assert client.get("/api/comuni", params={"q": "mil", "limit": 0}).status_code == 422
        assert client.get("/api/comuni", params={"q": "mil", "limit": 101}).status_code == 422

    def test_search_short_or_missing_query(self, client: TestClient) -> None:
        assert client.get("/api/comuni", params={"q": "m"}).json() == []
        assert client.get("/api/comuni").json() == []

    def test_detail(self, client: TestClient) -> None:
        resp = client.get("/api/comuni/h501")
        assert resp.status_code == 200
        assert resp.json() == {"nome": "Roma", "provincia": "RM", "cap": "00118", "codice": "H501"}

    def test_detail_unknown(self, client: TestClient) -> None:
        resp = client.get("/api/comuni/Z999")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Codice catastale non trovato"


class TestDipendentiRoutes:
    def test_prefill(self, client: TestClient) -> None:
        resp = client.post(
            "/api/dipendenti/prefill",
            json={"codice_fiscale": "RSSMRA85H52F205C", "nome": "Maria", "sesso": ""},
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "codice_fiscale": "RSSMRA85H52F205C",
            "nome": "Maria",
            "sesso": "F",
            "data_nascita": "12/06/1985",
            "luogo_nascita": "Milano (MI)",
        }

    def test_prefill_requires_cf(self, client: TestClient) -> None:
        assert client.post("/api/dipendenti/prefill", json={}).status_code == 422
        resp = client.post("/api/dipendenti/prefill", json={"codice_fiscale": "  "})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Codice fiscale obbligatorio"

    def test_validate_ok(self, client: TestClient) -> None:
        resp = client.post(
            "/api/dipendenti/validate",
            json={
                "nome": "Mario",
                "cognome": "Rossi",
                "codice_fiscale": "rssmra80a01h501u",
                "sesso": "M",
                "data_nascita": "01/01/1980",
                "luogo_nascita": "Roma (RM)",
                "email": "mario.rossi@example.com",
                "comune_residenza": "Roma",
                "cap": "00118",
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["codice_fiscale"] == "RSSMRA80A01H501U"
        assert body["data_nascita"] == "1980-01-01"
        assert body["telefono"] is None

    def test_validate_rejects_bad_cf(self, client: TestClient) -> None:
        resp = client.post(
            "/api/dipendenti/validate",
            json={
                "nome": "Mario",
                "cognome": "Rossi",
                "codice_fiscale": "RSSMRA80A01H501A",
                "sesso": "M",
                "data_nascita": "01/01/1980",
                "luogo_nascita": "Roma (RM)",
                "email": "mario.rossi@example.com",
                "comune_residenza": "Roma",
                "cap": "00118",
            },
        )
        assert resp.status_code == 422
        assert "Codice Fiscale non valido" in resp.text


class TestApplication:
    def test_health(self) -> None:
        from portale.main import app

        with TestClient(app) as client:
            resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert int(body["comuni"]) > 0

    def test_router_mounted(self) -> None:
        from portale.main import app

        with TestClient(app) as client:
            resp = client.get("/api/partita-iva/01234567897")
        assert resp.json()["valid"] is True
