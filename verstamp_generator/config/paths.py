"""Default file locations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

DEFAULT_CONFIG_NAMES = (
    "verstamp.yaml",
    "config/verstamp.yaml",
    ".verstamp.yaml",
)


def find_default_config(start: Optional[Path] = None) -> Path:
    """Find the generator configuration file.

    Returns the most likely path even if it doesn't exist, so callers can
    report a meaningful location.
    """
    base = Path(start) if start else Path(".")
    for name in DEFAULT_CONFIG_NAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return base / DEFAULT_CONFIG_NAMES[0]
