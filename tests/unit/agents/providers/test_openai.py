"""Tests for OpenAI provider."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from editmend.core.agents.providers.base import ProviderType
from editmend.core.agents.providers.errors import LLMCancelledError, LLMProviderError
from editmend.core.agents.providers.openai import OpenAIProvider


def _response(output_text='{"search": "a", "replace": "b"}', usage=True):
    response = MagicMock()
    response.id = "resp_123"
    response.output_text = output_text
    if usage:
        response.usage.input_tokens = 100
        response.usage.output_tokens = 50
        response.usage.total_tokens = 150
    else:
        response.usage = None
    return response


@pytest.fixture
def mock_async_client():
    """Mock AsyncOpenAI client."""
    client = MagicMock()
    client.with_options.return_value = client
    client.responses.create = AsyncMock(return_value=_response())
    return client


@pytest.fixture
def provider(mock_async_client):
    """Provider wired to the mock client."""
    with patch(
        "editmend.core.agents.providers.openai.AsyncOpenAI", return_value=mock_async_client
    ):
        yield OpenAIProvider(api_key="test-key")


def test_openai_provider_type():
    """Test provider type is OPENAI."""
    with patch("editmend.core.agents.providers.openai.AsyncOpenAI"):
        provider = OpenAIProvider(api_key="test-key")
        assert provider.provider_type == ProviderType.OPENAI


def test_openai_provider_init_passes_client_options():
    """Test client options are forwarded to the SDK."""
    with patch("editmend.core.agents.providers.openai.AsyncOpenAI") as mock_cls:
        OpenAIProvider(api_key="test-key", base_url="http://proxy", timeout=60.0)

    mock_cls.assert_called_once_with(api_key="test-key", base_url="http://proxy", timeout=60.0)


async def test_generate_json_async_success(provider, mock_async_client):
    """Test successful JSON generation."""
    schema = {"title": "SearchReplaceEdit", "type": "object"}

    response = await provider.generate_json_async(
        [{"role": "user", "content": "Fix it."}],
        "gpt-4.1-mini",
        schema=schema,
        system_prompt="You fix edits.",
        prompt_id="prompt-123",
        max_attempts=1,
    )

    assert response.content == {"search": "a", "replace": "b"}
    assert response.metadata.response_id == "resp_123"
    assert response.metadata.model == "gpt-4.1-mini"
    assert response.metadata.prompt_id == "prompt-123"
    assert response.metadata.token_usage.prompt_tokens == 100
    assert response.metadata.token_usage.completion_tokens == 50
    assert response.metadata.token_usage.total_tokens == 150

    mock_async_client.with_options.assert_called_once_with(max_retries=0)
    params = mock_async_client.responses.create.call_args.kwargs
    assert params["model"] == "gpt-4.1-mini"
    assert params["input"] == [{"role": "user", "content": "Fix it."}]
    assert params["instructions"] == "You fix edits."
    assert params["metadata"] == {"prompt_id": "prompt-123"}
    assert params["text"]["format"]["type"] == "json_schema"
    assert params["text"]["format"]["name"] == "SearchReplaceEdit"
    assert params["text"]["format"]["schema"] == schema


async def test_generate_json_async_without_schema(provider, mock_async_client):
    """Test plain JSON mode when no schema is given."""
    await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")

    mock_async_client.with_options.assert_not_called()
    params = mock_async_client.responses.create.call_args.kwargs
    assert params["text"] == {"format": {"type": "json_object"}}
    assert "instructions" not in params
    assert "metadata" not in params


async def test_generate_json_async_retry_budget(provider, mock_async_client):
    """Test SDK retries are derived from the attempt budget."""
    await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4", max_attempts=3)

    mock_async_client.with_options.assert_called_once_with(max_retries=2)


async def test_generate_json_async_temperature(provider, mock_async_client):
    """Test temperature is sent only for models that support it."""
    await provider.generate_json_async(
        [{"role": "user", "content": "x"}], "gpt-4.1", temperature=0.2
    )
    assert mock_async_client.responses.create.call_args.kwargs["temperature"] == 0.2

    await provider.generate_json_async(
        [{"role": "user", "content": "x"}], "gpt-4.1-mini", temperature=0.2
    )
    assert "temperature" not in mock_async_client.responses.create.call_args.kwargs


async def test_generate_json_async_already_cancelled(provider, mock_async_client):
    """Test a set cancel token prevents the request."""
    token = asyncio.Event()
    token.set()

    with pytest.raises(LLMCancelledError):
        await provider.generate_json_async(
            [{"role": "user", "content": "x"}], "gpt-4", cancel_token=token
        )

    mock_async_client.responses.create.assert_not_called()


async def test_generate_json_async_empty_response(provider, mock_async_client):
    """Test empty output raises LLMProviderError."""
    mock_async_client.responses.create.return_value = _response(output_text="")

    with pytest.raises(LLMProviderError, match="Empty response"):
        await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")


async def test_generate_json_async_invalid_json(provider, mock_async_client):
    """Test non-JSON output raises LLMProviderError."""
    mock_async_client.responses.create.return_value = _response(output_text="not json")

    with pytest.raises(LLMProviderError, match="Failed to parse JSON"):
        await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")


async def test_generate_json_async_wraps_errors(provider, mock_async_client):
    """Test SDK errors are wrapped in LLMProviderError."""
    mock_async_client.responses.create.side_effect = RuntimeError("connection reset")

    with pytest.raises(LLMProviderError) as exc_info:
        await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")

    assert "connection reset" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


async def test_token_tracking(provider, mock_async_client):
    """Test token usage accumulates and resets."""
    await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")
    await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")

    usage = provider.get_token_usage()
    assert usage.prompt_tokens == 200
    assert usage.completion_tokens == 100
    assert usage.total_tokens == 300

    provider.reset_token_tracking()
    assert provider.get_token_usage().total_tokens == 0


async def test_missing_usage_is_zero(provider, mock_async_client):
    """Test responses without usage report zero tokens."""
    mock_async_client.responses.create.return_value = _response(usage=False)

    response = await provider.generate_json_async([{"role": "user", "content": "x"}], "gpt-4")

    assert response.metadata.token_usage.total_tokens == 0
    assert provider.get_token_usage().total_tokens == 0
