from fastapi import APIRouter
from typing import Dict, Any

from omni_console.const import MASK_CHAR, MASKED_KEY_VISIBLE_CHARS
from omni_console.shared.logging import LoggingManager
from omni_console.shared.models import AppSettings, Provider


def mask_key(api_key: str) -> str:
    """Hide all but the last few characters of an API key."""
    if not api_key:
        return ""
    visible = api_key[-MASKED_KEY_VISIBLE_CHARS:] if len(api_key) > MASKED_KEY_VISIBLE_CHARS * 2 else ""
    return MASK_CHAR * (len(api_key) - len(visible)) + visible


class SettingsRouter:
    """Router for reading and saving the user settings."""

    def __init__(self, state):
        self.state = state
        self.logger = LoggingManager.get_logger(__name__)
        self.router = APIRouter(prefix="/api/settings", tags=["settings"])
        self.router.get("")(self.get_settings)
        self.router.put("")(self.save_settings)

    @classmethod
    def get_router(cls, state) -> APIRouter:
        """Get the router instance."""
        return cls(state).router

    def _public(self, settings: AppSettings) -> Dict[str, Any]:
        data = settings.model_dump(mode="json", by_alias=True)
        for provider in Provider:
            data[provider.settings_key]["apiKey"] = mask_key(settings.config_for(provider).api_key)
        return data

    async def get_settings(self) -> Dict[str, Any]:
        return self._public(self.state.settings)

    async def save_settings(self, settings: AppSettings) -> Dict[str, Any]:
        """Save settings. A masked key sent back unchanged keeps the stored key."""
        for provider in Provider:
            incoming = settings.config_for(provider)
            current = self.state.settings.config_for(provider).api_key
            if current and incoming.api_key == mask_key(current):
                incoming.api_key = current
        self.state.update_settings(settings)
        self.logger.info("Settings saved")
        return self._public(settings)
