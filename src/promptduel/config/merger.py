"""
Configuration merging helpers.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Merge rules:
    - Scalar values and lists: override replaces base
    - Dicts: recursive deep merge
    - null/None value: remove key from result

    Args:
        base: Base configuration dictionary.
        override: Override configuration dictionary.

    Returns:
        Merged configuration dictionary.
    """
    result = base.copy()

    for key, value in override.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """
    Set a value in a nested dictionary using dot notation.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated path (e.g., "orchestrator.max_iterations").
        value: Value to set.

    Returns:
        A new dictionary with the value set.
    """
    keys = key_path.split(".")
    result = config.copy()
    current = result

    for key in keys[:-1]:
        nested = current.get(key)
        current[key] = nested.copy() if isinstance(nested, dict) else {}
        current = current[key]

    current[keys[-1]] = value
    return result
