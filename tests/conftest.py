"""Shared pytest fixtures for editmend tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from editmend.core.agents.edit_fixer import MAX_CACHE_SIZE, EditCorrector, RequestContext
from editmend.core.caching import LRUCache

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def prompts_dir(fixtures_dir: Path) -> Path:
    """Get test prompt packs directory."""
    return fixtures_dir / "prompts"


# ============================================================================
# Edit Correction Fixtures
# ============================================================================


@pytest.fixture
def corrected_edit_payload() -> dict:
    """Well-formed model response for a corrected edit."""
    return {
        "search": "a",
        "replace": "b",
        "explanation": "x",
        "noChangesRequired": False,
    }


@pytest.fixture
def edit_args() -> dict[str, str]:
    """Arguments of a failed edit (instruction, old/new strings, error, content)."""
    return {
        "instruction": "Rename foo to bar",
        "old_string": "foo()",
        "new_string": "bar()",
        "error": "Failed to edit, could not find the string to replace.",
        "current_content": "def main():\n    foo ()\n",
    }


@pytest.fixture
def request_context() -> RequestContext:
    """Request context carrying a prompt id."""
    return RequestContext(prompt_id="prompt-123")


@pytest.fixture
def corrector() -> EditCorrector:
    """EditCorrector with a fresh cache and a short timeout."""
    return EditCorrector(LRUCache(max_size=MAX_CACHE_SIZE), timeout_ms=2_000)


@pytest.fixture
def cancel_event() -> asyncio.Event:
    """Caller cancellation event (not set)."""
    return asyncio.Event()
