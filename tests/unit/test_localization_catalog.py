"""Tests for the localisation catalogue helpers."""

from __future__ import annotations

import json
from pathlib import Path

from fedclaims.backend.app.localization import (
    get_translator,
    load_translations,
    normalise_locale,
)

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "fedclaims" / "translations"


def _read_message(locale: str, key: str) -> str:
    payload = json.loads(
        TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8")
    )
    return str(payload["messages"][key])


def test_get_translator_loads_shared_catalogue() -> None:
    translator = get_translator("en")

    assert translator.locale == "en"
    assert translator("breakdown.gross_amount") == _read_message(
        "en", "breakdown.gross_amount"
    )


def test_get_translator_falls_back_to_base_locale() -> None:
    """Unknown locales resolve to the French catalogue."""

    translator = get_translator("el")

    assert translator.locale == "fr"
    assert translator("breakdown.gross_amount") == "Montant TTC réel"


def test_unknown_keys_are_returned_verbatim() -> None:
    assert get_translator("en")("missing.key") == "missing.key"


def test_format_fills_placeholders() -> None:
    translator = get_translator("en")

    message = translator.format("warnings.mileage_rate_missing", horsepower=8)

    assert message == "No rate found for 8 HP"


def test_format_tolerates_missing_placeholders() -> None:
    translator = get_translator("en")

    assert translator.format("warnings.mileage_rate_missing") == _read_message(
        "en", "warnings.mileage_rate_missing"
    )


def test_normalise_locale_handles_regional_variants() -> None:
    assert normalise_locale("en-GB") == "en"
    assert normalise_locale("FR_fr") == "fr"
    assert normalise_locale(None) == "fr"


def test_catalogues_share_the_same_keys() -> None:
    french = json.loads(TRANSLATIONS_ROOT.joinpath("fr.json").read_text(encoding="utf-8"))
    english = json.loads(TRANSLATIONS_ROOT.joinpath("en.json").read_text(encoding="utf-8"))

    assert set(french["messages"]) == set(english["messages"])


def test_load_translations_exposes_catalogue_payload() -> None:
    payload = load_translations("en")

    assert payload["locale"] == "en"
    assert payload["available_locales"] == ["en", "fr"]
    assert payload["messages"]["iban.empty"] == "empty IBAN"
    assert payload["fallback"]["locale"] == "fr"
    assert payload["fallback"]["messages"]["iban.empty"] == "IBAN vide"
