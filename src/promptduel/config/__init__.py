"""
Application configuration for promptduel.
"""

from promptduel.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
    save_yaml_file,
)
from promptduel.config.merger import deep_merge, set_nested_value
from promptduel.config.schema import Config, EventsConfig, LoggingConfig, OrchestratorConfig

__all__ = [
    "Config",
    "ConfigurationError",
    "EventsConfig",
    "LoggingConfig",
    "OrchestratorConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "load_config",
    "load_yaml_file",
    "save_yaml_file",
    "set_nested_value",
]
