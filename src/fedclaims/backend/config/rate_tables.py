"""Configuration loader wrapping the shared rate table schema models."""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    KNOWN_TABLES,
    CeilingRule,
    ConfigurationError,
    MileageRate,
    RateTableManifest,
    RateTableManifestEntry,
    RateTables,
    RoleRate,
    TrainRefundBand,
    ValidityWindow,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_manifest() -> RateTableManifest:
    """Load and cache the configuration manifest."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError("Configuration manifest not found")

    raw_manifest = _load_yaml(MANIFEST_FILE)

    try:
        return RateTableManifest.model_validate(raw_manifest)
    except ValidationError as error:  # pragma: no cover - defensive
        raise ConfigurationError(f"Manifest validation failed: {error}") from error


def manifest_entries() -> Sequence[RateTableManifestEntry]:
    """Expose the configured manifest entries."""

    return load_manifest().tables


def _load_table_rows(entry: RateTableManifestEntry) -> tuple[list[Any], dict[str, Any]]:
    config_file = CONFIG_DIRECTORY / entry.resolved_filename
    if not config_file.exists():
        raise FileNotFoundError(
            f"Configuration file for table '{entry.table}' missing: {config_file.name}"
        )

    raw_table = _load_yaml(config_file)
    rows = raw_table.get("rows")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise ConfigurationError(f"Table '{entry.table}' must declare a list of rows")

    meta = raw_table.get("meta") or {}
    if not isinstance(meta, dict):
        raise ConfigurationError(f"Table '{entry.table}' metadata must be a mapping")
    return rows, meta


@lru_cache(maxsize=1)
def load_rate_tables() -> RateTables:
    """Load every declared rate table from disk, including closed rows."""

    payload: dict[str, Any] = {}
    meta: dict[str, Any] = {}

    for entry in manifest_entries():
        rows, table_meta = _load_table_rows(entry)
        payload[entry.table] = rows
        if table_meta:
            meta[entry.table] = table_meta

    payload["meta"] = meta

    try:
        return RateTables.model_validate(payload)
    except ValidationError as error:
        raise ConfigurationError(f"Rate table validation failed: {error}") from error


def current_rate_tables(on: date | None = None) -> RateTables:
    """Return the rows applicable on ``on`` (defaults to today)."""

    day = on or date.today()
    return load_rate_tables().valid_on(day)


def available_tables() -> Sequence[str]:
    """Return the table names declared in the manifest."""

    return load_manifest().table_names


__all__ = [
    "CONFIG_DIRECTORY",
    "CeilingRule",
    "ConfigurationError",
    "KNOWN_TABLES",
    "MANIFEST_FILE",
    "MileageRate",
    "RateTableManifest",
    "RateTableManifestEntry",
    "RateTables",
    "RoleRate",
    "TrainRefundBand",
    "ValidityWindow",
    "available_tables",
    "current_rate_tables",
    "load_manifest",
    "load_rate_tables",
    "manifest_entries",
]
