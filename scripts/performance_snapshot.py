#!/usr/bin/env python3
"""Time repeated reimbursement calculations for a quick performance baseline."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fedclaims.backend.app.services.reimbursement_service import (  # noqa: E402
    calculate_claim,
)

SAMPLE_PAYLOADS = {
    "car": {
        "claim": {
            "id": "perf-car",
            "user_id": "u-1",
            "expense_type": "car",
            "expense_date": "2024-06-01",
            "distance_km": 320,
            "cv_fiscaux": 5,
        },
        "requester_role": "bn_member",
    },
    "train": {
        "claim": {
            "id": "perf-train",
            "user_id": "u-1",
            "expense_type": "train",
            "expense_date": "2024-06-01",
            "amount_ttc": 180,
            "distance_km": 640,
        },
        "requester_role": "user",
    },
    "meal": {
        "claim": {
            "id": "perf-meal",
            "user_id": "u-2",
            "expense_type": "meal",
            "expense_date": "2024-06-01",
            "amount_ttc": 42.5,
        },
        "requester_role": "admin_asso",
        "locale": "en",
    },
}


def measure(payload: dict[str, object], iterations: int) -> dict[str, float]:
    """Return timing statistics for ``iterations`` calls of one payload."""

    calculate_claim(payload)  # warm the rate table cache
    start = perf_counter()
    for _ in range(iterations):
        calculate_claim(payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("FEDCLAIMS_PROFILE_ITERATIONS", "200"))
    report = {name: measure(payload, iterations) for name, payload in SAMPLE_PAYLOADS.items()}
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
