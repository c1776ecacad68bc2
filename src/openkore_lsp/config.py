"""
Server Configuration

Loads configuration from a YAML file and environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


# Configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".openkore-lsp" / "config.yaml",
]


DEFAULT_CONFIG = {
    # Alternative grammar YAML; None uses the bundled table
    "grammar_path": None,
    "log_level": "INFO",

    # File name suffixes that select the control dialects
    "items_control_suffix": "items_control.txt",
    "monster_control_suffix": "mon_control.txt",
}


ENV_OVERRIDES = {
    "OPENKORE_LSP_GRAMMAR": "grammar_path",
    "OPENKORE_LSP_LOG_LEVEL": "log_level",
}


class ServerConfig:
    """Configuration for the language server and CLI."""

    def __init__(self, config_path: Optional[Path] = None, load_file: bool = True):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        if load_file:
            self._load_config(config_path)

        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from the first YAML file found."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, "r", encoding="utf-8") as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError(f"expected a mapping, got {type(user_config).__name__}")
                    self._config.update(user_config)
                    self._config_path = config_path
                    return
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)

    def _apply_env_overrides(self) -> None:
        for env_var, config_key in ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def grammar_path(self) -> Optional[Path]:
        value = self._config.get("grammar_path")
        return Path(value).expanduser() if value else None

    @property
    def log_level(self) -> str:
        return str(self._config.get("log_level") or "INFO").upper()

    @property
    def items_control_suffix(self) -> str:
        return self._config["items_control_suffix"]

    @property
    def monster_control_suffix(self) -> str:
        return self._config["monster_control_suffix"]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._config)
