from fastapi import APIRouter
from typing import Dict, Any

from omni_console.const import (
    HEALTH_STATUS_DEGRADED,
    HEALTH_STATUS_HEALTHY,
    PROVIDER_STATUS_DISABLED,
    PROVIDER_STATUS_MISSING_KEY,
    PROVIDER_STATUS_READY,
)
from omni_console.shared.logging import LoggingManager
from omni_console.shared.models import Provider


class HealthRouter:
    """Router for health endpoints."""

    def __init__(self, state):
        self.state = state
        self.router = APIRouter(prefix="/health", tags=["health"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("", response_model=Dict[str, Any])(self.health_check)

    @classmethod
    def get_router(cls, state) -> APIRouter:
        """Get the router instance."""
        return cls(state).router

    async def health_check(self) -> Dict[str, Any]:
        """Report which providers can be called with the current settings."""
        providers = {}
        for provider in Provider:
            config = self.state.settings.config_for(provider)
            if not config.enabled:
                providers[provider.settings_key] = PROVIDER_STATUS_DISABLED
            elif not config.has_key:
                providers[provider.settings_key] = PROVIDER_STATUS_MISSING_KEY
            else:
                providers[provider.settings_key] = PROVIDER_STATUS_READY

        ready = any(status == PROVIDER_STATUS_READY for status in providers.values())
        status = HEALTH_STATUS_HEALTHY if ready else HEALTH_STATUS_DEGRADED
        self.logger.debug(f"Health check result: {status} {providers}")

        return {
            "status": status,
            "providers": providers,
            "models": len(self.state.catalog),
        }
