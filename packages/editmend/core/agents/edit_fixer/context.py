"""Per-call request context."""

from __future__ import annotations

import logging
import time
import uuid

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

FALLBACK_PROMPT_ID_PREFIX = "llm-fixer-fallback"


class RequestContext(BaseModel):
    """Call-scoped context passed explicitly by the caller.

    Attributes:
        prompt_id: Correlation id of the prompt that triggered the edit
    """

    prompt_id: str | None = None

    model_config = ConfigDict(frozen=True)


def resolve_prompt_id(context: RequestContext | None) -> str:
    """Return the context prompt id, or a synthesized fallback id.

    A missing id is not an error: a fallback id is built from the current
    time and a random suffix and a warning is logged.
    """
    if context is not None and context.prompt_id:
        return context.prompt_id

    prompt_id = f"{FALLBACK_PROMPT_ID_PREFIX}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"
    logger.warning(
        f"Could not find promptId in context. This is unexpected. Using a fallback ID: {prompt_id}"
    )
    return prompt_id
