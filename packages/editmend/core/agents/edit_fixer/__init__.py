"""Search/replace edit correction.

Example:
    corrector = create_edit_corrector(app_config.edit_fixer)
    edit = await corrector.correct_edit(
        instruction, old_string, new_string, error, current_content,
        provider, cancel_token, context=RequestContext(prompt_id="p-1"),
    )
    if edit is None:
        ...  # surface the original edit error
"""

from editmend.core.agents.edit_fixer.apply import EditApplyError, apply_edit
from editmend.core.agents.edit_fixer.context import RequestContext, resolve_prompt_id
from editmend.core.agents.edit_fixer.fixer import (
    DEFAULT_EDIT_FIXER_MODEL,
    GENERATE_JSON_TIMEOUT_MS,
    MAX_CACHE_SIZE,
    EditCorrector,
    create_edit_corrector,
)
from editmend.core.agents.edit_fixer.models import EditRequest, SearchReplaceEdit, response_schema
from editmend.core.agents.edit_fixer.prompt import ComposedPrompt, compose_prompt

__all__ = [
    "DEFAULT_EDIT_FIXER_MODEL",
    "GENERATE_JSON_TIMEOUT_MS",
    "MAX_CACHE_SIZE",
    "ComposedPrompt",
    "EditApplyError",
    "EditCorrector",
    "EditRequest",
    "RequestContext",
    "SearchReplaceEdit",
    "apply_edit",
    "compose_prompt",
    "create_edit_corrector",
    "resolve_prompt_id",
    "response_schema",
]
