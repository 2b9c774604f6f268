"""Orchestrate request validation, rate resolution and reimbursement calculations.

The service validates incoming payloads with the shared request models,
resolves the rate snapshot applicable to the claim, and hands both to the pure
engine. Profiling hooks and payload validation live here so that the engine
itself stays free of I/O and clock reads.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from datetime import date
from time import perf_counter
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from fedclaims.backend.app.localization import get_translator
from fedclaims.backend.app.models import (
    CalculationRequest,
    DuplicateCheckRequest,
    IbanCheckRequest,
    format_validation_error,
)
from fedclaims.backend.config.rate_tables import RateTables, current_rate_tables

from .calculators import calculate_reimbursement
from .duplicates import detect_duplicates
from .iban import format_iban, normalise_iban, validate_iban
from .references import generate_claim_reference

_LOGGER = logging.getLogger(__name__)

_Request = TypeVar("_Request", bound=BaseModel)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("FEDCLAIMS_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _parse_request(
    model: type[_Request], payload: Mapping[str, Any] | _Request
) -> _Request:
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def resolve_reference_date(request: CalculationRequest) -> date:
    """Return the date whose rates apply: explicit, then expense date, then today."""

    return request.reference_date or request.claim.expense_date or date.today()


def resolve_rate_tables(request: CalculationRequest, reference_date: date) -> RateTables:
    """Return the caller-supplied snapshot or the configured rows valid on the date."""

    if request.rates is not None:
        return request.rates.valid_on(reference_date)
    return current_rate_tables(reference_date)


def calculate_claim(
    payload: Mapping[str, Any] | CalculationRequest,
) -> dict[str, Any]:
    """Compute the reimbursement for the provided payload."""

    request_model = _parse_request(CalculationRequest, payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    reference_date = resolve_reference_date(request_model)
    translator = get_translator(request_model.locale)

    with _profile_section("rates", timings):
        tables = resolve_rate_tables(request_model, reference_date)

    with _profile_section("engine", timings):
        calculation = calculate_reimbursement(
            request_model.claim,
            request_model.requester_role,
            tables.mileage,
            tables.role_rates,
            tables.ceilings,
            tables.train_bands,
            translator=translator,
            reference_date=reference_date,
        )

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_claim timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    meta: dict[str, Any] = {
        "locale": translator.locale,
        "reference_date": reference_date.isoformat(),
        "requester_role": request_model.requester_role,
    }
    claim_id = request_model.claim.id
    if claim_id:
        meta["reference"] = generate_claim_reference(claim_id, reference_date.year)

    return {"calculation": calculation.as_payload(), "meta": meta}


def check_duplicates(
    payload: Mapping[str, Any] | DuplicateCheckRequest,
) -> dict[str, Any]:
    """Return the duplicate matches for the candidate claim in ``payload``."""

    request_model = _parse_request(DuplicateCheckRequest, payload)
    result = detect_duplicates(request_model.claim, request_model.existing_claims)

    if result.is_duplicate:
        _LOGGER.info(
            "Claim for user %s on %s matches %d existing claim(s)",
            request_model.claim.user_id,
            request_model.claim.expense_date,
            len(result.duplicates),
        )

    return {
        "isDuplicate": result.is_duplicate,
        "duplicates": [
            claim.model_dump(mode="json", exclude_none=True)
            for claim in result.duplicates
        ],
    }


def check_iban(payload: Mapping[str, Any] | IbanCheckRequest) -> dict[str, Any]:
    """Validate the IBAN in ``payload`` and describe it when valid."""

    request_model = _parse_request(IbanCheckRequest, payload)
    translator = get_translator(request_model.locale)
    raw = request_model.iban or ""

    validation = validate_iban(raw, translator)
    if not validation.valid:
        return {"valid": False, "error": validation.error}

    iban = normalise_iban(raw)
    return {
        "valid": True,
        "iban": iban,
        "formatted": format_iban(iban),
        "country": iban[:2],
    }


__all__ = [
    "calculate_claim",
    "check_duplicates",
    "check_iban",
    "resolve_rate_tables",
    "resolve_reference_date",
]
