"""Utility helpers for calculator modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from fedclaims.backend.app.models import BreakdownLine
from fedclaims.backend.config.rate_tables import ValidityWindow

_CENT = Decimal("0.01")


@dataclass
class CalculationTrace:
    """Ordered audit lines and warnings collected while a claim is computed."""

    breakdown: list[BreakdownLine] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_line(self, description: str, value: float) -> None:
        self.breakdown.append(BreakdownLine(description=description, value=value))

    def warn(self, message: str) -> None:
        self.warnings.append(message)


def is_row_current(row: ValidityWindow, reference_date: date | None) -> bool:
    """Return ``False`` only for rows already closed on ``reference_date``."""

    if reference_date is None:
        return True
    return not row.is_expired_on(reference_date)


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for the fraction ``value``."""

    percentage = value * 100
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def format_number(value: float) -> str:
    """Render ``value`` without trailing zeros (``200.0`` -> ``200``)."""

    if float(int(value)) == value:
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def round_currency(value: float) -> float:
    """Round monetary amounts to the cent, halves away from zero."""

    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))
