"""Timeout-bounded, single-attempt structured LLM invocation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from editmend.core.agents.cancellation import CancelReason, CompositeCancelToken
from editmend.core.agents.providers.base import LLMProvider
from editmend.core.agents.result import (
    InvocationOutcome,
    InvocationResult,
    no_result,
    success_result,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _cancelled_outcome(token: CompositeCancelToken) -> InvocationOutcome:
    if token.reason is CancelReason.TIMEOUT:
        return InvocationOutcome.TIMEOUT
    return InvocationOutcome.CANCELLED


async def generate_json_with_timeout(
    provider: LLMProvider,
    *,
    messages: list[dict[str, str]],
    model: str,
    response_model: type[T],
    timeout_s: float,
    cancel_token: asyncio.Event | None = None,
    schema: dict[str, Any] | None = None,
    system_prompt: str | None = None,
    prompt_id: str | None = None,
    max_attempts: int = 1,
) -> InvocationResult[T]:
    """Run one structured generation call bounded by a timeout and a caller token.

    The caller's token and the internal deadline are merged into a single
    composite token that is handed to the provider. The provider call and
    the composite token race; whichever finishes first decides the outcome
    and the loser is cancelled.

    Every failure (timeout, caller cancellation, provider error, response
    that fails ``response_model`` validation) is returned as a "no result"
    outcome. Nothing is raised to the caller.

    Args:
        provider: LLM provider
        messages: Request messages
        model: Model identifier
        response_model: Pydantic model the response content must validate against
        timeout_s: Deadline in seconds
        cancel_token: Caller cancellation event
        schema: Structured output schema
        system_prompt: System instruction
        prompt_id: Correlation id
        max_attempts: Attempt budget declared to the provider (1 = no retries)

    Returns:
        InvocationResult with validated output on success
    """
    async with CompositeCancelToken(cancel_token, timeout_s=timeout_s) as token:
        if token.is_cancelled():
            logger.debug(f"Skipping model call, already cancelled (prompt_id={prompt_id})")
            return no_result(_cancelled_outcome(token), "Cancelled before model call")

        call = asyncio.create_task(
            provider.generate_json_async(
                messages,
                model,
                schema=schema,
                system_prompt=system_prompt,
                prompt_id=prompt_id,
                cancel_token=token.event,
                max_attempts=max_attempts,
            )
        )
        waiter = asyncio.create_task(token.wait())

        try:
            done, _ = await asyncio.wait({call, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (call, waiter):
                if not task.done():
                    task.cancel()
            await asyncio.gather(call, waiter, return_exceptions=True)

        # Single observation point: a finished call wins over a simultaneous firing
        if call not in done:
            outcome = _cancelled_outcome(token)
            logger.debug(f"Model call aborted: {outcome.value} (prompt_id={prompt_id})")
            return no_result(outcome, f"Model call aborted ({outcome.value}, budget {timeout_s}s)")

        try:
            response = call.result()
            output = response_model.model_validate(response.content)
            metadata = {
                "response_id": response.metadata.response_id,
                "total_tokens": response.metadata.token_usage.total_tokens,
            }
        except Exception as e:
            outcome = InvocationOutcome.FAILED
            if token.is_cancelled():
                outcome = _cancelled_outcome(token)
            logger.debug(f"Model call failed: {outcome.value}: {e} (prompt_id={prompt_id})")
            return no_result(outcome, str(e))

        return success_result(output, metadata=metadata)
