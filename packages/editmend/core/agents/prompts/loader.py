"""Prompt pack loading.

A prompt pack is a directory holding Jinja2 templates:

    fixer/
    ├── system.j2   # required, sent as the system instruction
    └── user.j2     # optional, rendered into the single user message
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from editmend.core.agents.prompts.renderer import PromptRenderer

logger = logging.getLogger(__name__)

SYSTEM_TEMPLATE = "system.j2"
USER_TEMPLATE = "user.j2"


class LoadError(Exception):
    """Raised when a prompt pack cannot be read."""

    pass


@dataclass(frozen=True)
class PromptPack:
    """Templates (or rendered text) of one prompt pack."""

    name: str
    system: str
    user: str | None = None


class PromptPackLoader:
    """Reads prompt packs below a base directory and renders them."""

    def __init__(self, base_path: str | Path, renderer: PromptRenderer | None = None):
        """Initialize loader.

        Args:
            base_path: Directory that pack names are resolved against
            renderer: Template renderer (strict Jinja2 renderer if None)
        """
        self.base_path = Path(base_path)
        self.renderer = renderer or PromptRenderer()

    def _pack_dir(self, pack_name: str) -> Path:
        pack_dir = (self.base_path / pack_name).resolve()
        if not pack_dir.is_relative_to(self.base_path.resolve()):
            raise LoadError(f"Prompt pack '{pack_name}' is outside {self.base_path}")
        if not pack_dir.is_dir():
            raise LoadError(f"Prompt pack '{pack_name}' does not exist at {pack_dir}")
        return pack_dir

    def load(self, pack_name: str) -> PromptPack:
        """Read the raw templates of a pack.

        Args:
            pack_name: Pack directory, relative to the base path

        Returns:
            PromptPack holding unrendered templates

        Raises:
            LoadError: If the pack directory or its system.j2 is missing
        """
        pack_dir = self._pack_dir(pack_name)

        system_path = pack_dir / SYSTEM_TEMPLATE
        if not system_path.is_file():
            raise LoadError(f"Prompt pack '{pack_name}' has no {SYSTEM_TEMPLATE} in {pack_dir}")

        user_path = pack_dir / USER_TEMPLATE
        pack = PromptPack(
            name=pack_name,
            system=system_path.read_text(encoding="utf-8"),
            user=user_path.read_text(encoding="utf-8") if user_path.is_file() else None,
        )
        logger.debug(f"Loaded prompt pack '{pack_name}' (user template: {pack.user is not None})")
        return pack

    def load_and_render(self, pack_name: str, variables: dict[str, Any]) -> PromptPack:
        """Read a pack and render every template with the same variables.

        Raises:
            LoadError: If the pack cannot be read
            RenderError: If a template fails to render
        """
        pack = self.load(pack_name)
        return PromptPack(
            name=pack.name,
            system=self.renderer.render(pack.system, variables),
            user=None if pack.user is None else self.renderer.render(pack.user, variables),
        )
