"""JSON file persistence for the user settings blob and the model catalog.

Saved settings are merged over the defaults field by field for each provider, so
a file written before a field existed still loads.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import Config
from .models import AppSettings, ModelOption, Provider, ProviderConfig, dump_models


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 suggestions: Optional[List[str]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.config_key = config_key
        self.suggestions = suggestions or []
        self.cause = cause


logger = logging.getLogger(__name__)

PROVIDER_KEYS = tuple(provider.settings_key for provider in Provider)


def _alias(key: str) -> str:
    field = AppSettings.model_fields.get(key)
    return field.alias if field is not None and field.alias else key


def merge_settings(saved: Dict[str, Any]) -> AppSettings:
    """
    Merge a saved settings blob over the defaults.

    Keys may be camelCase or snake_case; both are normalized to the camelCase
    names used on disk before merging.

    Args:
        saved: Raw settings mapping as read from disk.

    Returns:
        Validated AppSettings.

    Raises:
        ValidationError: If a merged field has an invalid value.
    """
    defaults = AppSettings().model_dump(by_alias=True)
    merged = dict(defaults)
    for key, value in saved.items():
        key = _alias(key)
        if key in PROVIDER_KEYS:
            if isinstance(value, dict):
                given = ProviderConfig.model_validate(value).model_dump(by_alias=True, exclude_unset=True)
                merged[key] = {**defaults[key], **given}
            else:
                merged[key] = defaults[key]
        elif value not in (None, ""):
            merged[key] = value
    return AppSettings.model_validate(merged)


class SettingsStore:
    """Loads and saves AppSettings and the ModelOption catalog as JSON files."""

    def __init__(self, settings_path: Path, models_path: Path, google_api_key: str = ""):
        self.settings_path = Path(settings_path)
        self.models_path = Path(models_path)
        self.google_api_key = google_api_key

    @classmethod
    def from_config(cls, config: Config) -> 'SettingsStore':
        return cls(config.settings_path, config.models_path, config.google_api_key)

    def _read_json(self, path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            error_msg = f"Invalid JSON in {path}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg, config_key=str(path),
                                     suggestions=["Fix or delete the file to start from defaults"], cause=e)

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def load_settings(self) -> AppSettings:
        """Load settings, falling back to defaults when nothing was saved yet.

        Raises:
            ConfigurationError: If the settings file is not valid JSON or fails validation.
        """
        if not self.settings_path.exists():
            settings = AppSettings()
            if self.google_api_key:
                settings.google.api_key = self.google_api_key
                logger.info("No saved settings, using Google API key from environment")
            return settings

        data = self._read_json(self.settings_path)
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self.settings_path} must contain a JSON object",
                                     config_key=str(self.settings_path))
        try:
            settings = merge_settings(data)
        except ValidationError as e:
            error_msg = f"Settings validation error: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg, config_key=str(self.settings_path), cause=e)

        logger.info(f"Settings loaded from: {self.settings_path}")
        return settings

    def save_settings(self, settings: AppSettings) -> None:
        self._write_json(self.settings_path, settings.model_dump(mode="json", by_alias=True))
        logger.info(f"Settings saved: {self.settings_path}")

    def load_models(self) -> List[ModelOption]:
        """Load the model catalog, empty when nothing was saved yet.

        Raises:
            ConfigurationError: If the catalog file is not a valid list of models.
        """
        if not self.models_path.exists():
            return []

        data = self._read_json(self.models_path)
        if not isinstance(data, list):
            raise ConfigurationError(f"Model catalog {self.models_path} must contain a JSON list",
                                     config_key=str(self.models_path))
        try:
            models = [ModelOption.model_validate(row) for row in data]
        except ValidationError as e:
            error_msg = f"Model catalog validation error: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg, config_key=str(self.models_path), cause=e)

        logger.info(f"Loaded {len(models)} models from: {self.models_path}")
        return models

    def save_models(self, models: List[ModelOption]) -> None:
        self._write_json(self.models_path, dump_models(models))
        logger.debug(f"Model catalog saved: {self.models_path} ({len(models)} models)")
