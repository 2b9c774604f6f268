"""Distance-banded refund of train tickets.

The band percentage is the final payout fraction, so train claims never go
through the role rate step.
"""

from __future__ import annotations

from collections.abc import Sequence

from fedclaims.backend.app.localization import Translator
from fedclaims.backend.app.models import ClaimInput
from fedclaims.backend.config.rate_tables import TrainRefundBand

from .utils import CalculationTrace, format_number, round_currency

OUT_OF_BAND_PERCENTAGE = 70.0
OUT_OF_BAND_CAP = 250.0

DEFAULT_TRAIN_BANDS: tuple[TrainRefundBand, ...] = tuple(
    TrainRefundBand(
        min_km=lower,
        max_km=upper,
        percentage=percentage,
        max_amount=cap,
        description=f"Trajet {lower}-{upper}km",
    )
    for lower, upper, percentage, cap in (
        (0, 150, 100, 50),
        (150, 350, 100, 80),
        (350, 550, 95, 120),
        (550, 800, 90, 160),
        (800, 1200, 85, 200),
        (1200, 2000, 80, 250),
        (2000, 10000, 70, 350),
    )
)


def find_train_band(
    distance_km: float | None, bands: Sequence[TrainRefundBand]
) -> TrainRefundBand | None:
    """Return the band covering ``distance_km`` (``min <= d < max``)."""

    if distance_km is None:
        return None
    return next((band for band in bands if band.contains(distance_km)), None)


def calculate_train_refund(
    claim: ClaimInput,
    bands: Sequence[TrainRefundBand] | None,
    translator: Translator,
    trace: CalculationTrace,
) -> float:
    """Return the refunded share of the ticket price, rounded and capped."""

    scale = DEFAULT_TRAIN_BANDS if not bands else bands
    ticket_price = claim.gross_amount

    band = find_train_band(claim.distance_km, scale)
    if band is None:
        percentage = OUT_OF_BAND_PERCENTAGE
        cap: float | None = OUT_OF_BAND_CAP
        label = translator("train.out_of_band")
        if claim.distance_km is None:
            trace.warn(
                translator.format(
                    "warnings.train_distance_missing",
                    percentage=f"{format_number(percentage)}%",
                    cap=format_number(OUT_OF_BAND_CAP),
                )
            )
        else:
            trace.warn(
                translator.format(
                    "warnings.train_out_of_band",
                    distance=format_number(claim.distance_km),
                    percentage=f"{format_number(percentage)}%",
                    cap=format_number(OUT_OF_BAND_CAP),
                )
            )
    else:
        percentage = band.percentage
        cap = band.max_amount
        label = band.label

    refund = round_currency(ticket_price * (percentage / 100))
    if cap is not None:
        refund = min(refund, cap)

    trace.add_line(
        translator.format("breakdown.train_ticket", band=label),
        ticket_price,
    )
    trace.add_line(
        translator.format(
            "breakdown.train_refund",
            percentage=f"{format_number(percentage)}%",
            cap=(
                f"{format_number(cap)}€"
                if cap is not None
                else translator("breakdown.no_cap")
            ),
        ),
        refund,
    )
    return refund


__all__ = [
    "DEFAULT_TRAIN_BANDS",
    "OUT_OF_BAND_CAP",
    "OUT_OF_BAND_PERCENTAGE",
    "calculate_train_refund",
    "find_train_band",
]
