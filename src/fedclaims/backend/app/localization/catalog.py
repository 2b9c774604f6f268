"""Translation catalogue helpers backed by the packaged JSON resources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cache
from importlib import resources
from typing import Any, Mapping

BASE_LOCALE = "fr"
_TRANSLATIONS_PACKAGE = "fedclaims.translations"


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings."""

    locale: str
    _messages: Mapping[str, str]
    _fallback: Mapping[str, str]

    def __call__(self, key: str) -> str:
        return self._messages.get(key) or self._fallback.get(key, key)

    def format(self, key: str, **values: Any) -> str:
        """Return the message for ``key`` with ``str.format`` placeholders filled."""

        template = self(key)
        try:
            return template.format(**values)
        except (KeyError, IndexError):
            return template


@cache
def _available_locales() -> tuple[str, ...]:
    """Return the set of locales with published translation payloads."""

    try:
        root = resources.files(_TRANSLATIONS_PACKAGE)
    except ModuleNotFoundError:  # pragma: no cover - defensive fallback
        return (BASE_LOCALE,)

    locales = sorted(
        entry.name.removesuffix(".json")
        for entry in root.iterdir()
        if entry.name.endswith(".json")
    )
    return tuple(locales) or (BASE_LOCALE,)


@cache
def _load_messages(locale: str) -> Mapping[str, str]:
    """Load the flat message mapping for the requested locale."""

    try:
        resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    except ModuleNotFoundError:  # pragma: no cover - defensive fallback
        return {}

    if not resource.is_file():
        return {}

    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    messages = payload.get("messages") or {}
    if not isinstance(messages, dict):  # pragma: no cover - defensive guard
        return {}

    return {str(key): str(value) for key, value in messages.items()}


def normalise_locale(locale: str | None) -> str:
    """Normalise requested locale to a supported catalogue key."""

    if not locale:
        return BASE_LOCALE

    normalized = locale.lower().replace("_", "-").split("-")[0]
    return normalized if normalized in _available_locales() else BASE_LOCALE


def get_translator(locale: str | None = None) -> Translator:
    """Return a translator instance for the requested locale."""

    normalized = normalise_locale(locale)
    messages = _load_messages(normalized)
    fallback = _load_messages(BASE_LOCALE)

    return Translator(locale=normalized, _messages=messages, _fallback=fallback)


def load_translations(locale: str | None = None) -> dict[str, Any]:
    """Expose the message catalogue for API consumers."""

    normalized = normalise_locale(locale)

    return {
        "locale": normalized,
        "available_locales": list(_available_locales()),
        "messages": dict(_load_messages(normalized)),
        "fallback": {
            "locale": BASE_LOCALE,
            "messages": dict(_load_messages(BASE_LOCALE)),
        },
    }


__all__ = [
    "BASE_LOCALE",
    "Translator",
    "get_translator",
    "load_translations",
    "normalise_locale",
]
