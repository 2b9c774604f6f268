"""Reimbursement calculation steps and the engine that chains them."""

from .ceilings import CeilingOutcome, apply_ceiling, find_ceiling
from .engine import SECOND_VALIDATION_THRESHOLD, calculate_reimbursement
from .mileage import calculate_mileage_base, find_mileage_rate
from .role_rate import DEFAULT_ROLE_RATE, apply_role_rate, find_role_rate
from .train import (
    DEFAULT_TRAIN_BANDS,
    OUT_OF_BAND_CAP,
    OUT_OF_BAND_PERCENTAGE,
    calculate_train_refund,
    find_train_band,
)
from .utils import (
    CalculationTrace,
    format_number,
    format_percentage,
    round_currency,
)

__all__ = [
    "CalculationTrace",
    "CeilingOutcome",
    "DEFAULT_ROLE_RATE",
    "DEFAULT_TRAIN_BANDS",
    "OUT_OF_BAND_CAP",
    "OUT_OF_BAND_PERCENTAGE",
    "SECOND_VALIDATION_THRESHOLD",
    "apply_ceiling",
    "apply_role_rate",
    "calculate_mileage_base",
    "calculate_reimbursement",
    "calculate_train_refund",
    "find_ceiling",
    "find_mileage_rate",
    "find_role_rate",
    "find_train_band",
    "format_number",
    "format_percentage",
    "round_currency",
]
