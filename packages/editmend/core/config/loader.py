"""Load editmend configuration from JSON or YAML files and the environment."""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
import os
from pathlib import Path
from typing import IO, Any

import yaml

from editmend.core.config.models import AppConfig

logger = logging.getLogger(__name__)

_DEFAULT_APP_CONFIG_PATH = Path("config.json")

_FORMATS_BY_SUFFIX = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

# AppConfig field -> environment variable consulted when the field is unset
_ENV_FALLBACKS = {
    "llm_api_key": "OPENAI_API_KEY",
    "llm_base_url": "OPENAI_BASE_URL",
}


def detect_format(file_path: Path | str) -> str:
    """Return "json" or "yaml" based on the file extension.

    Raises:
        ValueError: For any other extension

    Example:
        >>> detect_format("config.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _FORMATS_BY_SUFFIX[suffix]
    except KeyError:
        raise ValueError(f"Unsupported config format: {suffix}") from None


def _read_yaml(f: IO[str]) -> dict[str, Any]:
    # An empty document parses as None
    return yaml.safe_load(f) or {}


_READERS: dict[str, tuple[Callable[[IO[str]], Any], type[Exception], str]] = {
    "json": (json.load, json.JSONDecodeError, "JSON"),
    "yaml": (_read_yaml, yaml.YAMLError, "YAML"),
}


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a config file into a plain dict.

    Args:
        path: Config file (.json, .yaml or .yml)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is unsupported or the content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    read, parse_error, label = _READERS[detect_format(path)]
    try:
        with path.open("r", encoding="utf-8") as f:
            return read(f)
    except parse_error as e:
        raise ValueError(f"Invalid {label} in {path}: {e}") from e


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate the application config.

    A missing file is not an error; defaults are used instead. API settings
    left unset in the file are taken from ``OPENAI_API_KEY`` and
    ``OPENAI_BASE_URL``.

    Args:
        path: Config file, ``config.json`` in the working directory if None

    Raises:
        ValidationError: If the file content does not validate
    """
    path = Path(path) if path is not None else _DEFAULT_APP_CONFIG_PATH

    if path.exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        logger.debug(f"App config not found at {path}, using defaults")
        config = AppConfig()

    return _apply_env_fallbacks(config)


def _apply_env_fallbacks(config: AppConfig) -> AppConfig:
    updates = {}
    for field_name, env_var in _ENV_FALLBACKS.items():
        if getattr(config, field_name) is not None:
            continue
        value = os.getenv(env_var)
        if value:
            logger.debug(f"Using {env_var} from environment for {field_name}")
            updates[field_name] = value

    return config.model_copy(update=updates) if updates else config
