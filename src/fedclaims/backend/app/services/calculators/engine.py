"""Reimbursement engine: claim plus rate snapshots in, audited result out.

The engine is a pure function. It performs no I/O, never reads the clock and
never raises for missing rate data: each degraded path falls back to a
documented default and records a warning so the caller can decide whether the
claim may be submitted.

Callers are expected to pass rows already filtered to the ones valid for the
claim (see ``RateTables.valid_on``). Mileage and ceiling lookups additionally
skip rows closed before the reference date, which is ``reference_date`` when
given and otherwise the claim's expense date.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from fedclaims.backend.app.localization import Translator, get_translator
from fedclaims.backend.app.models import (
    ClaimInput,
    ExpenseType,
    ReimbursementCalculation,
)
from fedclaims.backend.config.rate_tables import (
    CeilingRule,
    MileageRate,
    RoleRate,
    TrainRefundBand,
)

from .ceilings import apply_ceiling
from .mileage import calculate_mileage_base
from .role_rate import apply_role_rate
from .train import calculate_train_refund
from .utils import CalculationTrace, format_number

SECOND_VALIDATION_THRESHOLD = 500.0

_LOGGER = logging.getLogger(__name__)


def calculate_reimbursement(
    claim: ClaimInput,
    requester_role: str,
    mileage_rates: Sequence[MileageRate],
    role_rates: Sequence[RoleRate],
    ceilings: Sequence[CeilingRule],
    train_bands: Sequence[TrainRefundBand] | None = None,
    *,
    translator: Translator | None = None,
    reference_date: date | None = None,
) -> ReimbursementCalculation:
    """Compute the reimbursable amount of ``claim`` for ``requester_role``."""

    translator = translator or get_translator()
    reference = reference_date or claim.expense_date
    trace = CalculationTrace()

    if claim.expense_type is ExpenseType.TRAIN:
        base_amount = calculate_train_refund(claim, train_bands, translator, trace)
        rate_applied = 1.0
        calculated_amount = base_amount
    else:
        if claim.expense_type is ExpenseType.CAR and claim.has_mileage_inputs:
            base_amount = calculate_mileage_base(
                claim, mileage_rates, translator, trace, reference
            )
        else:
            base_amount = claim.gross_amount
            trace.add_line(translator("breakdown.gross_amount"), base_amount)

        rate_applied, calculated_amount = apply_role_rate(
            base_amount, requester_role, role_rates, translator, trace
        )

    outcome = apply_ceiling(
        calculated_amount,
        claim.expense_type,
        ceilings,
        translator,
        trace,
        reference,
    )
    reimbursable_amount = outcome.amount
    requires_second_validation = outcome.requires_validation

    if reimbursable_amount >= SECOND_VALIDATION_THRESHOLD:
        requires_second_validation = True
        trace.warn(
            translator.format(
                "warnings.second_validation_threshold",
                threshold=format_number(SECOND_VALIDATION_THRESHOLD),
            )
        )

    if trace.warnings:
        _LOGGER.debug(
            "Reimbursement for %s claim computed with %d warning(s)",
            claim.expense_type.value,
            len(trace.warnings),
        )

    return ReimbursementCalculation(
        base_amount=base_amount,
        rate_applied=rate_applied,
        calculated_amount=calculated_amount,
        reimbursable_amount=reimbursable_amount,
        exceeds_ceiling=outcome.exceeds_ceiling,
        requires_second_validation=requires_second_validation,
        breakdown=tuple(trace.breakdown),
        warnings=tuple(trace.warnings),
    )


__all__ = ["SECOND_VALIDATION_THRESHOLD", "calculate_reimbursement"]
