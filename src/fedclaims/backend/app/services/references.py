"""Human-facing claim references such as ``RBT-2025-1A2B3C4D``."""

from __future__ import annotations

from datetime import date

REFERENCE_PREFIX = "RBT"


def generate_claim_reference(claim_id: str, year: int | None = None) -> str:
    """Build the reference quoted to members for ``claim_id``."""

    if not claim_id:
        raise ValueError("A claim identifier is required to build a reference")

    reference_year = year if year is not None else date.today().year
    short_id = claim_id.replace("-", "")[:8].upper()
    return f"{REFERENCE_PREFIX}-{reference_year}-{short_id}"


__all__ = ["REFERENCE_PREFIX", "generate_claim_reference"]
