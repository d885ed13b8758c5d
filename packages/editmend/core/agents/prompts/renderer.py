"""Jinja2 rendering for prompt packs."""

from __future__ import annotations

import logging
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Raised when a prompt template cannot be rendered."""

    pass


class PromptRenderer:
    """Renders prompt templates with a strict, non-escaping Jinja2 environment.

    Edit payloads are arbitrary file content. Source code routinely contains
    text that looks like template syntax (``{{ x }}`` in Vue or Handlebars
    files, ``{% block %}`` in Django templates, ``{instruction}`` in format
    strings) as well as ``<``, ``&`` and quotes. The model must see that text
    exactly as it is in the file, or the search string it returns will not
    match. Two properties guarantee this:

    - Values are substituted in a single pass. Jinja2 compiles only the pack
      template, and the variable values are emitted as data. Placeholder-like
      text inside a value is never expanded.
    - Autoescaping is off, so markup characters pass through unchanged.

    Undefined variables raise instead of rendering as empty text, so a pack
    that names a field the request does not supply fails loudly.
    """

    def __init__(self) -> None:
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template: str, variables: dict[str, Any]) -> str:
        """Render ``template`` with ``variables``.

        Raises:
            RenderError: On syntax errors, undefined variables or any failure
                while rendering
        """
        try:
            return self.env.from_string(template).render(**variables)
        except TemplateSyntaxError as e:
            raise RenderError(f"Invalid template syntax at line {e.lineno}: {e.message}") from e
        except UndefinedError as e:
            raise RenderError(f"Missing variable in template: {e}") from e
        except Exception as e:
            logger.debug(f"Template rendering failed: {e}")
            raise RenderError(f"Template rendering failed: {e}") from e
