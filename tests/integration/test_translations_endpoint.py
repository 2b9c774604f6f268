"""Integration tests for the translations API."""

from __future__ import annotations

import json
from pathlib import Path

from flask.testing import FlaskClient

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "fedclaims" / "translations"


def _load_message(locale: str, key: str) -> str:
    payload = json.loads(
        TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8")
    )
    return str(payload["messages"][key])


def test_translations_endpoint_returns_default_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["locale"] == "fr"
    assert "en" in payload["available_locales"]
    assert payload["messages"]["breakdown.unit_ceiling"] == _load_message(
        "fr", "breakdown.unit_ceiling"
    )
    assert payload["fallback"]["locale"] == "fr"


def test_translations_endpoint_respects_locale_query(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/?locale=en")

    assert response.get_json()["locale"] == "en"


def test_translations_endpoint_respects_locale_path(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/en")
    assert response.status_code == 200
    payload = response.get_json()

    assert payload["locale"] == "en"
    assert payload["messages"]["breakdown.unit_ceiling"] == _load_message(
        "en", "breakdown.unit_ceiling"
    )
    assert payload["fallback"]["locale"] == "fr"


def test_unknown_locale_falls_back(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/de")

    assert response.get_json()["locale"] == "fr"
