"""Expose rate table snapshots consumed by the claim forms and admin screens.

Forms display the applicable mileage scale, role percentages and ceilings
without duplicating business rules, so everything here is read from the same
YAML-backed tables the calculation service uses.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from flask import Blueprint, jsonify, request

from fedclaims.backend.app.http import VALIDATION_ERROR, problem_response
from fedclaims.backend.app.services.calculators import (
    DEFAULT_TRAIN_BANDS,
    OUT_OF_BAND_CAP,
    OUT_OF_BAND_PERCENTAGE,
    SECOND_VALIDATION_THRESHOLD,
)
from fedclaims.backend.config.rate_tables import (
    RateTables,
    TrainRefundBand,
    available_tables,
    current_rate_tables,
)
from fedclaims.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    return {
        "version": get_project_version(),
        "tables": list(available_tables()),
    }


def _serialise_bands(bands: Sequence[TrainRefundBand]) -> list[dict[str, Any]]:
    return [band.model_dump(mode="json", by_alias=True) for band in bands]


def _serialise_tables(tables: RateTables, day: date) -> dict[str, Any]:
    bands = tables.train_bands or DEFAULT_TRAIN_BANDS
    return {
        "on": day.isoformat(),
        "mileage": [row.model_dump(mode="json", by_alias=True) for row in tables.mileage],
        "role_rates": [
            row.model_dump(mode="json", by_alias=True) for row in tables.role_rates
        ],
        "ceilings": [row.model_dump(mode="json", by_alias=True) for row in tables.ceilings],
        "train_bands": _serialise_bands(bands),
        "train_out_of_band": {
            "percentage_refund": OUT_OF_BAND_PERCENTAGE,
            "max_amount_euros": OUT_OF_BAND_CAP,
        },
        "second_validation_threshold": SECOND_VALIDATION_THRESHOLD,
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    payload = {"version": get_project_version()}
    return jsonify(payload), 200


@blueprint.get("/rates")
def get_rates() -> tuple[Any, int]:
    """Return the rows applicable on ``?on=YYYY-MM-DD`` (defaults to today)."""

    raw_day = request.args.get("on")
    if raw_day:
        try:
            day = date.fromisoformat(raw_day)
        except ValueError:
            return problem_response(
                VALIDATION_ERROR,
                status=400,
                message="Query parameter 'on' must be an ISO date (YYYY-MM-DD)",
            ).to_response()
    else:
        day = date.today()

    tables = current_rate_tables(day)
    return jsonify(_serialise_tables(tables, day)), 200


@blueprint.get("/train-bands/default")
def get_default_train_bands() -> tuple[Any, int]:
    """Return the built-in train scale used when no table is configured."""

    payload = {"train_bands": _serialise_bands(DEFAULT_TRAIN_BANDS)}
    return jsonify(payload), 200
