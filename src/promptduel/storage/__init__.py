"""Filesystem locations used by promptduel."""

from promptduel.storage.paths import (
    ensure_directory,
    get_config_path,
    get_promptduel_home,
    get_settings_path,
)

__all__ = [
    "ensure_directory",
    "get_config_path",
    "get_promptduel_home",
    "get_settings_path",
]
