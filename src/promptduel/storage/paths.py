"""
Path utilities for promptduel.

Provides consistent path resolution for the configuration file and the
settings store.
"""

import os
from pathlib import Path


def get_promptduel_home() -> Path:
    """
    Get the promptduel home directory.

    Resolution order:
    1. PROMPTDUEL_HOME environment variable
    2. Default: ~/.promptduel

    Returns:
        Path to the promptduel home directory.
    """
    env_home = os.environ.get("PROMPTDUEL_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".promptduel"


def get_config_path() -> Path:
    """
    Get the path to the application configuration file.

    Returns:
        Path to ~/.promptduel/config.yaml
    """
    return get_promptduel_home() / "config.yaml"


def get_settings_path() -> Path:
    """
    Get the path to the key-value settings store.

    Returns:
        Path to ~/.promptduel/settings.json
    """
    return get_promptduel_home() / "settings.json"


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for created directories.

    Returns:
        The path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
