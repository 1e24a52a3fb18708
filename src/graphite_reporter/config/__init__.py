"""
Configuration management for the graphite_reporter package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    build_app_config,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import (
    get_cluster_section,
    get_graphite_section,
    load_main_config,
    load_toml_file,
)
from .validators import (
    validate_cluster_name,
    validate_graphite_config,
)

__all__ = [
    # Main interface
    "get_config",
    "load_config",
    "build_app_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "get_cluster_section",
    "get_graphite_section",
    "validate_cluster_name",
    "validate_graphite_config",
]
