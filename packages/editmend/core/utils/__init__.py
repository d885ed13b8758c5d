"""Shared utilities for editmend."""

from editmend.core.utils.logging import StructuredJSONFormatter, configure_logging

__all__ = [
    "StructuredJSONFormatter",
    "configure_logging",
]
