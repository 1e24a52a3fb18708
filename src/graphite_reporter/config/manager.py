"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import get_cluster_section, get_graphite_section, load_main_config
from .validators import validate_cluster_name, validate_graphite_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

# This global variable will hold the single instance of the loaded AppConfig.
_CONFIG: Optional[AppConfig] = None

# Defines the default path to the main configuration file, relative to this script's location.
# This can be programmatically overridden (e.g., in tests or by the CLI main.py)
# to load a different configuration.
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to the main config.toml file

    Note:
        The cached configuration is dropped, so the next get_config()
        reloads from the new path.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def build_app_config(main_config_data: Dict[str, Any],
                     graphite_overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
    """
    Validate parsed configuration data into an AppConfig.

    Args:
        main_config_data: Parsed config.toml content
        graphite_overrides: Raw values replacing keys of `[metrics.graphite]`
                            (e.g. from command-line flags); None values are ignored

    Returns:
        Validated AppConfig instance
    """
    cluster_name = validate_cluster_name(get_cluster_section(main_config_data))

    graphite_data = dict(get_graphite_section(main_config_data))
    if graphite_overrides:
        graphite_data.update({k: v for k, v in graphite_overrides.items() if v is not None})

    graphite_config = validate_graphite_config(graphite_data, cluster_name=cluster_name)
    return AppConfig(cluster_name=cluster_name, graphite=graphite_config)


def load_config(config_path: Optional[Path] = None,
                graphite_overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
    """
    Load the application configuration from a TOML file.

    This is the function that performs the actual loading and validation.
    Without a path, only built-in defaults and the overrides are used.

    Args:
        config_path: Path to the main config.toml file, or None
        graphite_overrides: See build_app_config

    Returns:
        Fully validated AppConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        main_config_data = load_main_config(config_path) if config_path is not None else {}
        app_config = build_app_config(main_config_data, graphite_overrides)

        graphite = app_config.graphite
        logger.info(
            f"Successfully loaded configuration for cluster [{app_config.cluster_name}] "
            f"(graphite host: [{graphite.host or '<none>'}])"
        )
        return app_config

    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    The first call loads and validates the configuration file; subsequent
    calls return the cached instance.

    Returns:
        The singleton AppConfig instance

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """
    Check if configuration has been loaded and cached.
    """
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "cluster_name": _CONFIG.cluster_name if _CONFIG else None,
        "graphite_enabled": _CONFIG.graphite.enabled if _CONFIG else False,
    }
