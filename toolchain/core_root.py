"""toolchain/core_root.py

Repository root locator shared by the composition root and the CLI.

Kept in its own tiny module so other packages can import :data:`ROOT_DIR`
without pulling in subprocess helpers.
"""

from __future__ import annotations

from pathlib import Path


# Repo root = parent of toolchain/
ROOT_DIR = Path(__file__).resolve().parents[1]
