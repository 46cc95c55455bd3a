"""Pytest bootstrap to ensure package paths are importable from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

EXTRA_PATHS = [
    ROOT / "tests",
    ROOT / "src",
]

for path in EXTRA_PATHS:
    if path.exists():
        sys.path.insert(0, str(path))
