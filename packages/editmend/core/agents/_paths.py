"""Filesystem locations inside the agents package.

Kept free of agents imports so any submodule can use it.
"""

from __future__ import annotations

from pathlib import Path

AGENTS_BASE_PATH: Path = Path(__file__).resolve().parent
"""Base path for prompt packs, resolved from the install location rather
than the working directory."""
