"""Prompt loading and rendering system."""

from editmend.core.agents.prompts.loader import LoadError, PromptPack, PromptPackLoader
from editmend.core.agents.prompts.renderer import PromptRenderer, RenderError

__all__ = ["LoadError", "PromptPack", "PromptPackLoader", "PromptRenderer", "RenderError"]
