"""Configuration models for editmend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EditFixerConfig(BaseModel):
    """Edit correction configuration."""

    model: str = Field(default="gpt-4.1-mini", description="Model used for correction calls")

    timeout_ms: int = Field(default=40_000, gt=0, description="Deadline per model call (ms)")

    max_cache_size: int = Field(
        default=50, ge=1, description="Maximum number of cached corrections (LRU)"
    )

    max_attempts: int = Field(
        default=1, ge=1, description="Attempt budget declared to the provider (1 = no retries)"
    )

    cache_enabled: bool = Field(default=True, description="Memoize corrections by content")

    prompt_pack: str = Field(
        default="edit_fixer/prompts/fixer",
        description="Prompt pack path relative to the agents package",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    llm_provider: str = "openai"
    llm_api_key: str | None = None
    llm_base_url: str | None = None
    edit_fixer: EditFixerConfig = EditFixerConfig()
    logging: LoggingConfig = LoggingConfig()
