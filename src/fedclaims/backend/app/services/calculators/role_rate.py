"""Role-based reimbursement percentage."""

from __future__ import annotations

from collections.abc import Sequence

from fedclaims.backend.app.localization import Translator
from fedclaims.backend.app.models import RoleTier
from fedclaims.backend.config.rate_tables import RoleRate

from .utils import CalculationTrace, format_percentage

DEFAULT_ROLE_RATE = 0.50


def find_role_rate(rates: Sequence[RoleRate], tier: RoleTier) -> RoleRate | None:
    """Return the row whose role matches the tier's rate key."""

    return next((row for row in rates if row.role == tier.rate_key), None)


def apply_role_rate(
    base_amount: float,
    requester_role: str,
    rates: Sequence[RoleRate],
    translator: Translator,
    trace: CalculationTrace,
) -> tuple[float, float]:
    """Return ``(rate_applied, calculated_amount)`` for ``requester_role``."""

    tier = RoleTier.from_role(requester_role)
    row = find_role_rate(rates, tier)

    if row is None:
        rate = DEFAULT_ROLE_RATE
        trace.warn(
            translator.format(
                "warnings.role_rate_missing",
                role=requester_role,
                percentage=format_percentage(rate),
            )
        )
    else:
        rate = row.rate

    calculated = base_amount * rate
    trace.add_line(
        translator.format(
            "breakdown.role_rate",
            percentage=format_percentage(rate),
            role=requester_role,
        ),
        calculated,
    )
    return rate, calculated


__all__ = ["DEFAULT_ROLE_RATE", "apply_role_rate", "find_role_rate"]
