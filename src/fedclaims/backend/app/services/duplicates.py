"""Literal duplicate matching across a claimant's existing claims."""

from __future__ import annotations

from collections.abc import Iterable

from fedclaims.backend.app.models import (
    TERMINAL_NEGATIVE_STATUSES,
    ClaimRecord,
    DuplicateCheck,
)

AMOUNT_TOLERANCE = 0.01


def _is_duplicate_of(candidate: ClaimRecord, existing: ClaimRecord) -> bool:
    if candidate.id is not None and existing.id == candidate.id:
        return False
    if existing.user_id != candidate.user_id:
        return False
    if existing.expense_date != candidate.expense_date:
        return False
    if abs(existing.gross_amount - candidate.gross_amount) >= AMOUNT_TOLERANCE:
        return False
    return existing.status not in TERMINAL_NEGATIVE_STATUSES


def detect_duplicates(
    candidate: ClaimRecord, existing_claims: Iterable[ClaimRecord]
) -> DuplicateCheck:
    """Return every existing claim matching ``candidate``'s user, date and amount.

    Refused and closed claims never count; paid claims still do.
    """

    duplicates = tuple(
        claim for claim in existing_claims if _is_duplicate_of(candidate, claim)
    )
    return DuplicateCheck(is_duplicate=bool(duplicates), duplicates=duplicates)


__all__ = ["AMOUNT_TOLERANCE", "detect_duplicates"]
