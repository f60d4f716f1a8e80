"""Persisted model settings and system prompts."""

from promptduel.settings.models import (
    DEFAULT_API_URL,
    DEFAULT_MODEL_NAME,
    DEFAULT_SYSTEM_PROMPT,
    ModelSettings,
    PromptSlot,
)
from promptduel.settings.store import MODEL_SETTINGS_KEY, KeyValueStore, SettingsProvider

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_MODEL_NAME",
    "DEFAULT_SYSTEM_PROMPT",
    "MODEL_SETTINGS_KEY",
    "KeyValueStore",
    "ModelSettings",
    "PromptSlot",
    "SettingsProvider",
]
