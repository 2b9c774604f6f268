#!/usr/bin/env python3
"""Check the rate table YAML files from a plain checkout.

Usage: ``scripts/validate_config.py [--on YYYY-MM-DD]``
"""

from __future__ import annotations

import sys
from pathlib import Path

# Running from a checkout: expose ``src`` the same way ``tests/conftest.py`` does.
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from fedclaims.backend.config.validator import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
