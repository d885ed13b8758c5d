"""editmend session coordinator - shared services for edit repair.

The session provides the infrastructure a host application needs:
- Configuration management
- LLM provider
- A process-lifetime edit corrector (and its cache)
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from editmend.core.agents.edit_fixer import EditCorrector, create_edit_corrector
from editmend.core.agents.providers.base import LLMProvider
from editmend.core.agents.providers.factory import create_llm_provider
from editmend.core.config.loader import load_app_config
from editmend.core.config.models import AppConfig

logger = logging.getLogger(__name__)


class EditMendSession:
    """Session coordinator for edit repair.

    Services are built lazily on first access and reused afterwards, so the
    corrector's cache lives as long as the session.
    """

    def __init__(
        self,
        *,
        app_config: AppConfig | Path | str | None = None,
        session_id: str | None = None,
    ):
        """Initialize session.

        Args:
            app_config: AppConfig instance, path, or None (uses default path)
            session_id: Optional session ID. If None, generates a new UUID.

        Raises:
            ValidationError: If config is invalid
        """
        self.app_config: AppConfig = self._resolve_config(app_config)
        self.session_id = session_id or str(uuid4())

        logger.debug(f"Session initialized: session_id={self.session_id}")

    @staticmethod
    def _resolve_config(value: AppConfig | Path | str | None) -> AppConfig:
        """Resolve config from value, path, or default.

        Raises:
            TypeError: If value is wrong type
        """
        if value is None:
            return load_app_config()
        elif isinstance(value, (Path, str)):
            return load_app_config(Path(value))
        elif isinstance(value, AppConfig):
            return value
        else:
            raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    @property
    def llm_provider(self) -> LLMProvider:
        """Get LLM provider for this session.

        Lazy-loaded on first access.

        Raises:
            ValueError: If the configured provider is unknown
        """
        if not hasattr(self, "_llm_provider"):
            self._llm_provider = create_llm_provider(self.app_config)
        return self._llm_provider

    @property
    def edit_corrector(self) -> EditCorrector:
        """Get the edit corrector for this session.

        Lazy-loaded on first access.
        """
        if not hasattr(self, "_edit_corrector"):
            self._edit_corrector = create_edit_corrector(self.app_config.edit_fixer)
        return self._edit_corrector
