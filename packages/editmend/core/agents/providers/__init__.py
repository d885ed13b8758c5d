"""LLM provider abstraction for agents."""

from editmend.core.agents.providers.base import (
    LLMProvider,
    LLMResponse,
    ProviderType,
    ResponseMetadata,
    TokenUsage,
)
from editmend.core.agents.providers.errors import LLMCancelledError, LLMProviderError
from editmend.core.agents.providers.openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "ProviderType",
    "ResponseMetadata",
    "TokenUsage",
    "LLMCancelledError",
    "LLMProviderError",
    "OpenAIProvider",
]
