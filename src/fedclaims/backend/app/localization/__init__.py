"""Locale-aware wording for breakdown lines, warnings and IBAN errors."""

from .catalog import (
    BASE_LOCALE,
    Translator,
    get_translator,
    load_translations,
    normalise_locale,
)

__all__ = [
    "BASE_LOCALE",
    "Translator",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
