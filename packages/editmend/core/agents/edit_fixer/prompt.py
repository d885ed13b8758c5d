"""Prompt composition for edit correction."""

from __future__ import annotations

from dataclasses import dataclass

from editmend.core.agents.edit_fixer.models import EditRequest
from editmend.core.agents.prompts import PromptPackLoader

EDIT_FIXER_PROMPT_PACK = "edit_fixer/prompts/fixer"


@dataclass(frozen=True)
class ComposedPrompt:
    """System instruction plus the single user message."""

    system: str
    user: str

    def messages(self) -> list[dict[str, str]]:
        """Ordered message list for the provider."""
        return [{"role": "user", "content": self.user}]


def compose_prompt(
    request: EditRequest,
    loader: PromptPackLoader,
    pack_name: str = EDIT_FIXER_PROMPT_PACK,
) -> ComposedPrompt:
    """Render the edit-fixer prompt pack for a request.

    Field values are inserted verbatim in one pass; text in a field that
    looks like a placeholder is left as-is.

    Raises:
        LoadError: If the prompt pack is missing
        RenderError: If a template references an unknown variable
    """
    rendered = loader.load_and_render(pack_name, request.prompt_variables())
    return ComposedPrompt(
        system=rendered.system.strip(),
        user=(rendered.user or "").strip(),
    )
