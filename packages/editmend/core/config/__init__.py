"""Configuration management for editmend."""

from editmend.core.config.loader import detect_format, load_app_config, load_config
from editmend.core.config.models import AppConfig, EditFixerConfig, LoggingConfig

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    # Models
    "AppConfig",
    "EditFixerConfig",
    "LoggingConfig",
]
