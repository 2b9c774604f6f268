"""Resolve the fedclaims version for the health and metadata endpoints."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "fedclaims"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, else the one in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Read ``version`` from the ``[project]`` table of a ``pyproject.toml`` file.

    Source checkouts that were never installed have no distribution metadata,
    so the project file is the fallback source of truth.
    """

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    in_project = False
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        if line.startswith("["):
            in_project = line == "[project]"
            continue
        if not in_project:
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip() == "version":
            version = value.strip().strip("\"'")
            if version:
                return version
            break

    raise RuntimeError(f"Unable to determine project version from {path}")


__all__ = ["PACKAGE_NAME", "get_project_version", "read_pyproject_version"]
