"""
Key-value settings store.

A small file-backed string store with localStorage semantics: each key maps
to a string, structured values are stored as JSON text. SettingsProvider
layers typed access to model settings and the two system prompts on top.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from promptduel.settings.models import DEFAULT_SYSTEM_PROMPT, ModelSettings, PromptSlot
from promptduel.storage.paths import ensure_directory, get_settings_path

logger = logging.getLogger(__name__)

MODEL_SETTINGS_KEY = "modelSettings"


class KeyValueStore:
    """File-backed string key-value store.

    Args:
        path: JSON file holding the store. None keeps the store in memory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Cannot read settings store {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Settings store {self.path} is not a JSON object, ignoring it")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        if self.path is None:
            return

        ensure_directory(self.path.parent)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        """Get a stored value, or None."""
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value and persist the store."""
        self._data[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        if self._data.pop(key, None) is not None:
            self._write()

    def keys(self) -> list[str]:
        """List stored keys."""
        return list(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SettingsProvider:
    """Typed access to persisted model settings and prompts."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @classmethod
    def default(cls) -> "SettingsProvider":
        """Provider backed by the store under the promptduel home directory."""
        return cls(KeyValueStore(get_settings_path()))

    def get_model_settings(self) -> ModelSettings:
        """Load model settings, merged over defaults.

        An unreadable record falls back to the defaults. Individual fields
        that fail validation fall back to their default while the remaining
        stored fields are kept.
        """
        raw = self.store.get_item(MODEL_SETTINGS_KEY)
        if not raw:
            return ModelSettings()

        try:
            saved = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to read model settings, using defaults: {e}")
            return ModelSettings()
        if not isinstance(saved, dict):
            logger.error("Stored model settings are not an object, using defaults")
            return ModelSettings()

        defaults = ModelSettings().to_storage()
        merged = {**defaults, **saved}
        try:
            return ModelSettings.model_validate(merged)
        except ValidationError as e:
            invalid = {error["loc"][0] for error in e.errors() if error["loc"]}
            logger.warning(
                f"Ignoring invalid stored model settings: {', '.join(sorted(map(str, invalid)))}"
            )
            for key in invalid:
                if key in defaults:
                    merged[key] = defaults[key]
                else:
                    merged.pop(key, None)
            return ModelSettings.model_validate(merged)

    def save_model_settings(self, settings: ModelSettings) -> None:
        """Persist model settings."""
        self.store.set_item(
            MODEL_SETTINGS_KEY, json.dumps(settings.to_storage(), ensure_ascii=False)
        )
        logger.info("Model settings saved")

    def update_model_settings(self, **changes: Any) -> ModelSettings:
        """Apply field changes (by name or stored alias), validate and save.

        Raises:
            pydantic.ValidationError: If the result is invalid
        """
        current = self.get_model_settings().to_storage()
        aliases = {
            name: field.alias or name for name, field in ModelSettings.model_fields.items()
        }
        for key, value in changes.items():
            current[aliases.get(key, key)] = value

        settings = ModelSettings.model_validate(current)
        self.save_model_settings(settings)
        return settings

    def is_api_configured(self) -> bool:
        """Whether an API key has been saved."""
        return self.get_model_settings().has_api_key

    def get_prompt(self, slot: PromptSlot) -> str:
        """Load a system prompt, falling back to the built-in prompt."""
        return self.store.get_item(slot.storage_key) or DEFAULT_SYSTEM_PROMPT

    def save_prompt(self, slot: PromptSlot, prompt: str) -> None:
        """Persist a system prompt."""
        self.store.set_item(slot.storage_key, prompt)
        logger.info(f"System prompt {slot.value} saved")

    def reset_prompt(self, slot: PromptSlot) -> None:
        """Drop a saved prompt so the built-in prompt is used again."""
        self.store.remove_item(slot.storage_key)

    def get_prompts(self) -> dict[PromptSlot, str]:
        """Load both prompts."""
        return {slot: self.get_prompt(slot) for slot in PromptSlot}
