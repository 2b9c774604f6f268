"""Coverage for the distance-banded train refund scale."""

from __future__ import annotations

import pytest

from fedclaims.backend.app.localization import get_translator
from fedclaims.backend.app.models import ClaimInput
from fedclaims.backend.app.services.calculators import (
    DEFAULT_TRAIN_BANDS,
    OUT_OF_BAND_CAP,
    CalculationTrace,
    calculate_train_refund,
    find_train_band,
)
from fedclaims.backend.config.rate_tables import TrainRefundBand, load_rate_tables


def test_every_distance_below_ten_thousand_has_exactly_one_band() -> None:
    for distance in range(0, 10000):
        matches = [band for band in DEFAULT_TRAIN_BANDS if band.contains(distance)]
        assert len(matches) == 1, f"{distance} km matched {len(matches)} bands"


@pytest.mark.parametrize("distance", [10000, 10001, 25000])
def test_distances_beyond_scale_have_no_band(distance: int) -> None:
    assert find_train_band(distance, DEFAULT_TRAIN_BANDS) is None


@pytest.mark.parametrize(
    ("distance", "expected"),
    [(0, "Trajet 0-150km"), (149.9, "Trajet 0-150km"), (150, "Trajet 150-350km")],
)
def test_band_lower_bound_is_inclusive(distance: float, expected: str) -> None:
    band = find_train_band(distance, DEFAULT_TRAIN_BANDS)

    assert band is not None
    assert band.label == expected


def test_packaged_bands_match_built_in_scale() -> None:
    assert tuple(load_rate_tables().train_bands) == DEFAULT_TRAIN_BANDS


def test_configured_bands_replace_defaults() -> None:
    bands = (
        TrainRefundBand(min_km=0, max_km=500, percentage=50, max_amount=None),
    )
    claim = ClaimInput(expense_type="train", amount_ttc=300.0, distance_km=200)
    trace = CalculationTrace()

    refund = calculate_train_refund(claim, bands, get_translator("en"), trace)

    assert refund == pytest.approx(150.0)
    assert trace.breakdown[0].description == "Ticket price (0-500 km)"
    assert trace.breakdown[1].description == "Train refund 50% (cap none)"


def test_refund_is_rounded_before_cap() -> None:
    claim = ClaimInput(expense_type="train", amount_ttc=47.0, distance_km=400)
    trace = CalculationTrace()

    refund = calculate_train_refund(claim, None, get_translator(), trace)

    assert refund == 44.65


@pytest.mark.parametrize(
    ("ticket_price", "percentage", "expected"),
    [(10.25, 50, 5.13), (5.125, 100, 5.13), (0.05, 50, 0.03)],
)
def test_half_cents_round_up(
    ticket_price: float, percentage: float, expected: float
) -> None:
    bands = (TrainRefundBand(min_km=0, max_km=1000, percentage=percentage),)
    claim = ClaimInput(expense_type="train", amount_ttc=ticket_price, distance_km=120)
    trace = CalculationTrace()

    refund = calculate_train_refund(claim, bands, get_translator(), trace)

    assert refund == expected


def test_out_of_band_cap_applies() -> None:
    claim = ClaimInput(expense_type="train", amount_ttc=1000.0, distance_km=15000)
    trace = CalculationTrace()

    refund = calculate_train_refund(claim, (), get_translator(), trace)

    assert refund == OUT_OF_BAND_CAP
    assert trace.breakdown[0].description == "Prix du billet (Hors barème)"
