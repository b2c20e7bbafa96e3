"""
================================================================================
CNA Automation Common Utilities
================================================================================

Shared configuration management and logging setup for the fixture layer.

Exports:
    - GlobalConfig: Singleton configuration manager
    - get_config: Convenience function to get configuration values
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from cna_automation.common import get_config, init_logger

    init_logger()
    server = get_config("browser.server", "localhost")

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from cna_automation.exceptions import ConfigurationError

# ============================================================
# Configuration Management
# ============================================================

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Environment variable -> dot-notation key
ENV_MAPPING: Dict[str, str] = {
    "SWT_AUTOMATION_SERVER": "browser.server",
    "SWT_AUTOMATION_BROWSER": "browser.type",
    "SWT_AUTOMATION_PORT": "browser.port",
    "CNA_HEADLESS": "browser.headless",
    "CNA_LAYOUT_DIR": "layout.directory",
    "CNA_LOG_LEVEL": "logging.level",
    "CNA_LOG_FILE": "logging.file",
}


class GlobalConfig:
    """
    Singleton class to manage the fixture configuration.

    Loads settings from ``config/config.yaml`` and environment variables.
    Environment variables take precedence over file-based configuration.
    """
    _instance: Optional["GlobalConfig"] = None
    _config: Dict[str, Any] = {}
    _initialized: bool = False

    def __new__(cls, config_path: Optional[Path] = None) -> "GlobalConfig":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        if self._initialized:
            return
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_configs()
        self._initialized = True

    def _load_configs(self) -> None:
        """
        Loads configuration from the YAML file and environment variables.
        """
        self._config = {}
        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    self._config = yaml.safe_load(f) or {}
                logger.debug(f"Loaded configuration from {self._config_path}")
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {e}"
                ) from e
        else:
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )

        for env_key, config_key in ENV_MAPPING.items():
            if env_key in os.environ:
                self._set_nested(config_key, os.environ[env_key])

    def _set_nested(self, key: str, value: Any) -> None:
        """
        Sets a nested configuration value using dot notation.
        """
        keys = key.split(".")
        current = self._config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using dot notation.

        Values coming from environment variables are strings; they are cast
        to the type of ``default`` when one is given.

        Args:
            key: Configuration key (e.g., "browser.server")
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        if isinstance(value, str) and default is not None:
            return self._convert_type(value, default)
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Sets a configuration value.

        Args:
            key: Configuration key (e.g., "browser.server")
            value: Value to set
        """
        self._set_nested(key, value)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Return a top-level section as a dictionary (empty if missing)."""
        value = self._config.get(section, {})
        return dict(value) if isinstance(value, dict) else {}

    def reload(self) -> None:
        """Re-read the YAML file and environment variables."""
        self._load_configs()

    @staticmethod
    def _convert_type(value: str, default: Any) -> Any:
        """Convert a string value to the type of the default."""
        if isinstance(default, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(default, int):
            try:
                return int(value)
            except ValueError:
                return default
        if isinstance(default, float):
            try:
                return float(value)
            except ValueError:
                return default
        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access reloads (used by tests)."""
        global _global_config
        cls._instance = None
        cls._config = {}
        cls._initialized = False
        _global_config = None


# Global config instance
_global_config: Optional[GlobalConfig] = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Args:
        key: Configuration key using dot notation
        default: Default value if not found

    Returns:
        Configuration value or default

    Example:
        server = get_config("browser.server", "localhost")
    """
    global _global_config
    if _global_config is None:
        _global_config = GlobalConfig()
    return _global_config.get(key, default)


def set_config(key: str, value: Any) -> None:
    """
    Convenience function to set a configuration value.

    Args:
        key: Configuration key using dot notation
        value: Value to set
    """
    global _global_config
    if _global_config is None:
        _global_config = GlobalConfig()
    _global_config.set(key, value)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def init_logger(
    level: str = None,
    format_string: str = None,
    log_file: str = None
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/fixture.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    level = level or get_config("logging.level", "INFO")
    format_string = format_string or get_config(
        "logging.format",
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "init_logger",
]
