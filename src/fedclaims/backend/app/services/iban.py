"""Syntactic IBAN validation (ISO 13616 structure and mod-97 checksum)."""

from __future__ import annotations

import re
from typing import Final

from fedclaims.backend.app.localization import Translator, get_translator
from fedclaims.backend.app.models import IbanValidation

_WHITESPACE = re.compile(r"\s+")
_STRUCTURE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}$")
_CHUNK_SIZE: Final = 7

# Total IBAN lengths for the SEPA countries members are paid in most often.
COUNTRY_LENGTHS: Final[dict[str, int]] = {
    "AT": 20,
    "BE": 16,
    "CH": 21,
    "DE": 22,
    "ES": 24,
    "FR": 27,
    "GB": 22,
    "IE": 22,
    "IT": 27,
    "LU": 20,
    "MC": 27,
    "NL": 18,
    "PT": 25,
}


def normalise_iban(raw: str) -> str:
    """Strip whitespace and uppercase ``raw``."""

    return _WHITESPACE.sub("", raw).upper()


def format_iban(raw: str) -> str:
    """Group a normalised IBAN in blocks of four characters for display."""

    clean = normalise_iban(raw)
    return " ".join(clean[index : index + 4] for index in range(0, len(clean), 4))


def _checksum_remainder(iban: str) -> int:
    rearranged = iban[4:] + iban[:4]
    digits = "".join(
        str(ord(char) - 55) if char.isalpha() else char for char in rearranged
    )

    remainder = 0
    for start in range(0, len(digits), _CHUNK_SIZE):
        chunk = digits[start : start + _CHUNK_SIZE]
        remainder = int(f"{remainder}{chunk}") % 97
    return remainder


def validate_iban(raw: str | None, translator: Translator | None = None) -> IbanValidation:
    """Validate ``raw`` and return a typed result instead of raising."""

    translator = translator or get_translator()

    if raw is None or not raw.strip():
        return IbanValidation(valid=False, error=translator("iban.empty"))

    iban = normalise_iban(raw)
    if not _STRUCTURE.match(iban):
        return IbanValidation(valid=False, error=translator("iban.invalid_format"))

    country = iban[:2]
    expected_length = COUNTRY_LENGTHS.get(country)
    if expected_length is not None and len(iban) != expected_length:
        return IbanValidation(
            valid=False,
            error=translator.format(
                "iban.invalid_length", country=country, expected=expected_length
            ),
        )

    if _checksum_remainder(iban) != 1:
        return IbanValidation(valid=False, error=translator("iban.invalid_checksum"))

    return IbanValidation(valid=True)


__all__ = ["COUNTRY_LENGTHS", "format_iban", "normalise_iban", "validate_iban"]
