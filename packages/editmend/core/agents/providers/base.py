"""Types shared by LLM providers and their callers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class ProviderType(str, Enum):
    """Known provider backends."""

    OPENAI = "openai"


@dataclass(frozen=True)
class TokenUsage:
    """Token counts for one response, or a running total."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class ResponseMetadata:
    """Bookkeeping returned alongside the content."""

    response_id: str | None = None
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    model: str | None = None
    prompt_id: str | None = None


@dataclass(frozen=True)
class LLMResponse:
    """Parsed JSON content plus metadata."""

    content: Any
    metadata: ResponseMetadata


class LLMProvider(Protocol):
    """What the edit corrector needs from a model backend.

    A provider sends one structured-output request per call and returns the
    decoded JSON. It does not cache, and it treats ``max_attempts`` as the
    total request budget: with 1 it must not retry.
    """

    @property
    def provider_type(self) -> ProviderType: ...

    async def generate_json_async(
        self,
        messages: list[dict[str, str]],
        model: str,
        *,
        schema: dict[str, Any] | None = None,
        system_prompt: str | None = None,
        prompt_id: str | None = None,
        cancel_token: asyncio.Event | None = None,
        max_attempts: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Request a JSON object from the model.

        Args:
            messages: Conversation as role/content dicts
            model: Model identifier
            schema: JSON schema for the response (free-form JSON if None)
            system_prompt: System instruction
            prompt_id: Correlation id forwarded with the request
            cancel_token: Aborts the request once set
            max_attempts: Total attempts, None for the backend default
            temperature: Sampling temperature, ignored where unsupported

        Raises:
            LLMCancelledError: If cancel_token is set before sending
            LLMProviderError: If the request fails or returns unusable content
        """
        ...

    def get_token_usage(self) -> TokenUsage:
        """Running token total since creation or the last reset."""
        ...

    def reset_token_tracking(self) -> None: ...
