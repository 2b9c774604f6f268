"""Kilometric allowance for car journeys."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from fedclaims.backend.app.localization import Translator
from fedclaims.backend.app.models import ClaimInput
from fedclaims.backend.config.rate_tables import MileageRate

from .utils import CalculationTrace, format_number, is_row_current


def find_mileage_rate(
    rates: Sequence[MileageRate],
    horsepower: int,
    reference_date: date | None = None,
) -> MileageRate | None:
    """Return the first non-expired row for the ``horsepower`` class."""

    return next(
        (
            row
            for row in rates
            if row.horsepower == horsepower and is_row_current(row, reference_date)
        ),
        None,
    )


def calculate_mileage_base(
    claim: ClaimInput,
    rates: Sequence[MileageRate],
    translator: Translator,
    trace: CalculationTrace,
    reference_date: date | None = None,
) -> float:
    """Return ``distance × rate`` or the declared amount when no rate matches."""

    horsepower = claim.cv_fiscaux or 0
    distance = claim.distance_km or 0.0

    rate = find_mileage_rate(rates, horsepower, reference_date)
    if rate is None:
        trace.warn(
            translator.format("warnings.mileage_rate_missing", horsepower=horsepower)
        )
        return claim.gross_amount

    base = distance * rate.rate_per_km
    trace.add_line(
        translator.format(
            "breakdown.mileage",
            distance=format_number(distance),
            rate=format_number(rate.rate_per_km),
            horsepower=horsepower,
        ),
        base,
    )
    return base


__all__ = ["calculate_mileage_base", "find_mileage_rate"]
