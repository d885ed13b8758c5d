"""Result types for bounded LLM invocations.

Provides immutable result types with success/no-result semantics.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

TOutput = TypeVar("TOutput")


class InvocationOutcome(str, Enum):
    """How a bounded invocation ended."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    FAILED = "failed"


class InvocationResult(BaseModel, Generic[TOutput]):
    """Result from a single bounded LLM invocation.

    Immutable result type. Never raised - every failure mode is captured
    as a "no result" outcome so callers can fall back without exception
    handling.

    Attributes:
        outcome: How the invocation ended
        output: Validated output (only for SUCCESS)
        error: Failure description (for every other outcome)
        metadata: Optional metadata (response id, tokens, etc.)

    Example:
        >>> result = success_result(edit)
        >>> if result.succeeded:
        ...     print(result.output)
        >>> result = no_result(InvocationOutcome.TIMEOUT, "deadline exceeded")
        >>> result.output is None
        True
    """

    outcome: InvocationOutcome = Field(description="How the invocation ended")
    output: TOutput | None = Field(default=None, description="Output (if success)")
    error: str | None = Field(default=None, description="Error message (if no result)")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Optional metadata (response id, tokens, etc.)"
    )

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @property
    def succeeded(self) -> bool:
        """True when the invocation produced an output."""
        return self.outcome is InvocationOutcome.SUCCESS


def success_result(
    output: TOutput,
    metadata: dict[str, Any] | None = None,
) -> InvocationResult[TOutput]:
    """Create success result.

    Args:
        output: Validated output
        metadata: Optional metadata

    Returns:
        InvocationResult with outcome SUCCESS
    """
    return InvocationResult(
        outcome=InvocationOutcome.SUCCESS,
        output=output,
        metadata=metadata or {},
    )


def no_result(
    outcome: InvocationOutcome,
    error: str,
    metadata: dict[str, Any] | None = None,
) -> InvocationResult[Any]:
    """Create "no result" outcome.

    Args:
        outcome: TIMEOUT, CANCELLED or FAILED
        error: What happened
        metadata: Optional metadata

    Returns:
        InvocationResult without output

    Raises:
        ValueError: If outcome is SUCCESS
    """
    if outcome is InvocationOutcome.SUCCESS:
        raise ValueError("no_result() requires a non-success outcome")

    return InvocationResult(
        outcome=outcome,
        error=error,
        metadata=metadata or {},
    )
