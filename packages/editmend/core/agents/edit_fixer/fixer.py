"""LLM-assisted repair of failed search/replace edits."""

from __future__ import annotations

import asyncio
import logging

from editmend.core.agents._paths import AGENTS_BASE_PATH
from editmend.core.agents.edit_fixer.context import RequestContext, resolve_prompt_id
from editmend.core.agents.edit_fixer.models import EditRequest, SearchReplaceEdit, response_schema
from editmend.core.agents.edit_fixer.prompt import EDIT_FIXER_PROMPT_PACK, compose_prompt
from editmend.core.agents.invoker import generate_json_with_timeout
from editmend.core.agents.prompts import PromptPackLoader
from editmend.core.agents.providers.base import LLMProvider
from editmend.core.caching import Cache, LRUCache, NullCache, compute_fingerprint
from editmend.core.config.models import EditFixerConfig

logger = logging.getLogger(__name__)

MAX_CACHE_SIZE = 50
GENERATE_JSON_TIMEOUT_MS = 40_000
DEFAULT_EDIT_FIXER_MODEL = "gpt-4.1-mini"


class EditCorrector:
    """Asks a model for a corrected search/replace pair when an edit fails.

    Results are memoized by request content, so an identical repair request
    is answered from the cache without another model call. The cache is owned
    by the corrector and lives as long as it does.

    Every model-side failure (timeout, cancellation, transport or schema
    error) yields None. Callers treat None as "repair unavailable".

    Concurrent requests for the same key are not de-duplicated: both may
    miss the cache and both call the model; the last write wins.
    """

    def __init__(
        self,
        cache: Cache[SearchReplaceEdit],
        *,
        prompt_loader: PromptPackLoader | None = None,
        prompt_pack: str = EDIT_FIXER_PROMPT_PACK,
        model: str = DEFAULT_EDIT_FIXER_MODEL,
        timeout_ms: int = GENERATE_JSON_TIMEOUT_MS,
        max_attempts: int = 1,
    ) -> None:
        """Initialize edit corrector.

        Args:
            cache: Cache for corrected edits
            prompt_loader: Prompt pack loader (defaults to the packaged prompts)
            prompt_pack: Prompt pack name relative to the loader base path
            model: Model identifier for correction calls
            timeout_ms: Deadline per model call in milliseconds
            max_attempts: Attempt budget declared to the provider
        """
        self.cache = cache
        self.prompt_loader = prompt_loader or PromptPackLoader(base_path=AGENTS_BASE_PATH)
        self.prompt_pack = prompt_pack
        self.model = model
        self.timeout_ms = timeout_ms
        self.max_attempts = max_attempts
        self._schema = response_schema()

    @staticmethod
    def cache_key(request: EditRequest) -> str:
        """SHA256 fingerprint of the request content (fixed field order)."""
        return compute_fingerprint(request.cache_fields())

    async def correct_edit(
        self,
        instruction: str,
        old_string: str,
        new_string: str,
        error: str,
        current_content: str,
        provider: LLMProvider,
        cancel_token: asyncio.Event | None,
        *,
        context: RequestContext | None = None,
    ) -> SearchReplaceEdit | None:
        """Attempt to fix a failed edit with a new search/replace pair.

        Args:
            instruction: What the edit was meant to achieve
            old_string: Original search text
            new_string: Original replacement text
            error: Error reported when the edit failed
            current_content: Current content of the file
            provider: LLM provider used for the correction call
            cancel_token: Caller cancellation event
            context: Call-scoped context carrying the prompt id

        Returns:
            Corrected edit, or None if no correction could be produced
        """
        request = EditRequest(
            instruction=instruction,
            old_string=old_string,
            new_string=new_string,
            error=error,
            current_content=current_content,
        )
        return await self.correct(request, provider, cancel_token, context=context)

    async def correct(
        self,
        request: EditRequest,
        provider: LLMProvider,
        cancel_token: asyncio.Event | None,
        *,
        context: RequestContext | None = None,
    ) -> SearchReplaceEdit | None:
        """Same as correct_edit() for an already built request."""
        prompt_id = resolve_prompt_id(context)

        key = self.cache_key(request)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Edit correction cache hit ({key[:12]}, prompt_id={prompt_id})")
            return cached

        prompt = compose_prompt(request, self.prompt_loader, self.prompt_pack)

        result = await generate_json_with_timeout(
            provider,
            messages=prompt.messages(),
            model=self.model,
            response_model=SearchReplaceEdit,
            timeout_s=self.timeout_ms / 1000.0,
            cancel_token=cancel_token,
            schema=self._schema,
            system_prompt=prompt.system,
            prompt_id=prompt_id,
            max_attempts=self.max_attempts,
        )

        if not result.succeeded or result.output is None:
            logger.debug(
                f"Edit correction unavailable: {result.outcome.value} "
                f"({result.error}, prompt_id={prompt_id})"
            )
            return None

        self.cache.set(key, result.output)
        return result.output

    def reset_caches_for_testing(self) -> None:
        """Empty the correction cache. For test isolation only."""
        self.cache.clear()


def create_edit_corrector(config: EditFixerConfig | None = None) -> EditCorrector:
    """Create an EditCorrector from configuration.

    Args:
        config: Edit fixer configuration (defaults if None)

    Returns:
        EditCorrector with an LRU cache, or a null cache when caching is disabled
    """
    config = config or EditFixerConfig()

    cache: Cache[SearchReplaceEdit]
    if config.cache_enabled:
        cache = LRUCache(max_size=config.max_cache_size)
    else:
        cache = NullCache()

    return EditCorrector(
        cache,
        prompt_pack=config.prompt_pack,
        model=config.model,
        timeout_ms=config.timeout_ms,
        max_attempts=config.max_attempts,
    )
