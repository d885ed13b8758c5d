"""OpenAI provider (Responses API, structured JSON output)."""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any

from openai import AsyncOpenAI

from editmend.core.agents.providers.base import (
    LLMResponse,
    ProviderType,
    ResponseMetadata,
    TokenUsage,
)
from editmend.core.agents.providers.errors import LLMCancelledError, LLMProviderError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_NAME = "response"


def _text_format(schema: dict[str, Any] | None) -> dict[str, Any]:
    """``text`` parameter of a Responses API request."""
    if schema is None:
        return {"format": {"type": "json_object"}}

    return {
        "format": {
            "type": "json_schema",
            "name": schema.get("title", DEFAULT_SCHEMA_NAME),
            "schema": schema,
            # Strict mode would make every property required
            "strict": False,
        }
    }


def _usage(response: Any) -> TokenUsage:
    usage = getattr(response, "usage", None)
    if not usage:
        return TokenUsage()
    return TokenUsage(
        prompt_tokens=getattr(usage, "input_tokens", 0) or 0,
        completion_tokens=getattr(usage, "output_tokens", 0) or 0,
        total_tokens=getattr(usage, "total_tokens", 0) or 0,
    )


def _decode(output_text: str | None) -> Any:
    if not output_text:
        raise LLMProviderError("Empty response from OpenAI API")
    try:
        return json.loads(output_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        raise LLMProviderError(f"Failed to parse JSON response: {e}") from e


class OpenAIProvider:
    """LLMProvider backed by ``AsyncOpenAI``.

    Each call is one Responses API request. The SDK retry count is derived
    from ``max_attempts`` per call, so a budget of 1 disables retries. No
    caching and no deadline handling happen here; callers race their own.
    Token totals are kept behind a lock and may be read from any thread.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ):
        """Initialize provider.

        Args:
            api_key: OpenAI API key (the SDK falls back to OPENAI_API_KEY)
            base_url: Alternate API endpoint, e.g. a proxy
            timeout: SDK request timeout in seconds
        """
        self._async_client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self._token_lock = threading.Lock()
        self._total_tokens = TokenUsage()

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OPENAI

    def get_token_usage(self) -> TokenUsage:
        with self._token_lock:
            return self._total_tokens

    def reset_token_tracking(self) -> None:
        with self._token_lock:
            self._total_tokens = TokenUsage()

    def _add_usage(self, usage: TokenUsage) -> None:
        with self._token_lock:
            total = self._total_tokens
            self._total_tokens = TokenUsage(
                prompt_tokens=total.prompt_tokens + usage.prompt_tokens,
                completion_tokens=total.completion_tokens + usage.completion_tokens,
                total_tokens=total.total_tokens + usage.total_tokens,
            )

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
        """Send one structured-output request and decode the JSON reply.

        ``system_prompt`` goes out as ``instructions`` and ``prompt_id`` as
        request metadata. Mini models reject ``temperature``, so it is
        dropped for them.

        Raises:
            LLMCancelledError: If cancel_token is already set
            LLMProviderError: On API errors, empty output or invalid JSON
        """
        if cancel_token is not None and cancel_token.is_set():
            raise LLMCancelledError("Request cancelled before it was sent")

        params: dict[str, Any] = {
            "model": model,
            "input": messages,
            "text": _text_format(schema),
        }
        if system_prompt:
            params["instructions"] = system_prompt
        if prompt_id:
            params["metadata"] = {"prompt_id": prompt_id}
        if temperature is not None and "mini" not in model.lower():
            params["temperature"] = temperature

        client = self._async_client
        if max_attempts is not None:
            client = client.with_options(max_retries=max(max_attempts - 1, 0))

        try:
            response = await client.responses.create(**params)
        except Exception as e:
            logger.error(f"OpenAI request failed (prompt_id={prompt_id}): {e}")
            raise LLMProviderError(f"Provider error: {e}") from e

        content = _decode(response.output_text)
        usage = _usage(response)
        self._add_usage(usage)

        return LLMResponse(
            content=content,
            metadata=ResponseMetadata(
                response_id=getattr(response, "id", None),
                token_usage=usage,
                model=model,
                prompt_id=prompt_id,
            ),
        )
