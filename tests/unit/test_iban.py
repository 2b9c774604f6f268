"""Unit coverage for the syntactic IBAN check."""

from __future__ import annotations

import pytest

from fedclaims.backend.app.localization import get_translator
from fedclaims.backend.app.services.iban import (
    format_iban,
    normalise_iban,
    validate_iban,
)

VALID_FR = "FR76 3000 1007 9412 3456 7890 185"


def test_valid_french_iban_with_spaces() -> None:
    result = validate_iban(VALID_FR)

    assert result.valid is True
    assert result.error is None


@pytest.mark.parametrize(
    "iban",
    [
        "fr7630001007941234567890185",
        "DE89 3704 0044 0532 0130 00",
        "GB82WEST12345698765432",
    ],
)
def test_other_valid_ibans(iban: str) -> None:
    assert validate_iban(iban).valid is True


def test_altered_digit_fails_checksum() -> None:
    result = validate_iban("FR76 3000 1007 9412 3456 7890 186", get_translator("en"))

    assert result.valid is False
    assert result.error == "Invalid IBAN checksum"


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_iban_is_reported(raw: str | None) -> None:
    result = validate_iban(raw)

    assert result.valid is False
    assert result.error == "IBAN vide"


def test_malformed_iban_is_reported() -> None:
    result = validate_iban("12FR3000", get_translator("en"))

    assert result.valid is False
    assert result.error == "Invalid IBAN format"


def test_wrong_length_for_country_is_reported() -> None:
    result = validate_iban("FR76 3000 1007 9412 3456 7890 18", get_translator("en"))

    assert result.valid is False
    assert result.error == "Invalid IBAN length for country FR (27 characters expected)"


def test_normalise_and_format_round_trip() -> None:
    clean = normalise_iban(" fr76 3000\t1007 9412 3456 7890 185 ")

    assert clean == "FR7630001007941234567890185"
    assert format_iban(clean) == VALID_FR
