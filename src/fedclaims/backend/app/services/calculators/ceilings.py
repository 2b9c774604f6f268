"""Per-category unit ceilings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from fedclaims.backend.app.localization import Translator
from fedclaims.backend.app.models import ExpenseType
from fedclaims.backend.config.rate_tables import CeilingRule

from .utils import CalculationTrace, format_number, is_row_current


@dataclass(frozen=True)
class CeilingOutcome:
    amount: float
    exceeds_ceiling: bool = False
    requires_validation: bool = False


def find_ceiling(
    ceilings: Sequence[CeilingRule],
    expense_type: ExpenseType,
    reference_date: date | None = None,
) -> CeilingRule | None:
    return next(
        (
            rule
            for rule in ceilings
            if rule.expense_type == expense_type.value
            and is_row_current(rule, reference_date)
        ),
        None,
    )


def apply_ceiling(
    amount: float,
    expense_type: ExpenseType,
    ceilings: Sequence[CeilingRule],
    translator: Translator,
    trace: CalculationTrace,
    reference_date: date | None = None,
) -> CeilingOutcome:
    """Clamp ``amount`` to the category's unit ceiling.

    A zero or missing unit ceiling means no clamp. Daily and monthly ceilings
    need the claimant's other claims and are not enforced here.
    """

    rule = find_ceiling(ceilings, expense_type, reference_date)
    if rule is None:
        return CeilingOutcome(amount=amount)

    exceeds = False
    ceiling = rule.unit_ceiling
    if ceiling and amount > ceiling:
        exceeds = True
        amount = ceiling
        trace.warn(
            translator.format(
                "warnings.unit_ceiling_exceeded",
                ceiling=format_number(ceiling),
                expense_type=expense_type.value,
            )
        )
        trace.add_line(translator("breakdown.unit_ceiling"), amount)

    return CeilingOutcome(
        amount=amount,
        exceeds_ceiling=exceeds,
        requires_validation=rule.requires_validation or exceeds,
    )


__all__ = ["CeilingOutcome", "apply_ceiling", "find_ceiling"]
