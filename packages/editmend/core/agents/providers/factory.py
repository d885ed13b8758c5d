"""Build the configured LLM provider."""

from __future__ import annotations

from editmend.core.agents.providers.base import LLMProvider, ProviderType
from editmend.core.agents.providers.openai import OpenAIProvider
from editmend.core.config.models import AppConfig


def create_llm_provider(app_config: AppConfig) -> LLMProvider:
    """Create the provider named by ``app_config.llm_provider``.

    Raises:
        ValueError: If the name is not a known provider
    """
    name = app_config.llm_provider.lower().strip()

    try:
        provider_type = ProviderType(name)
    except ValueError:
        raise ValueError(f"Unknown LLM provider configured: {app_config.llm_provider}") from None

    if provider_type is ProviderType.OPENAI:
        return OpenAIProvider(api_key=app_config.llm_api_key, base_url=app_config.llm_base_url)

    raise ValueError(f"No factory for LLM provider: {provider_type.value}")
