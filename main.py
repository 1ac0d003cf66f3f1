"""Main entry point for the Omni Console."""

from typing import Optional

from fastapi import FastAPI

from omni_console.const import APP_DESCRIPTION, APP_TITLE, APP_VERSION
from omni_console.providers.registry import ProviderRegistry
from omni_console.shared.config import Config
from omni_console.shared.logging import LoggingManager
from omni_console.slices.chat.chat_router import ChatRouter
from omni_console.slices.health.health_router import HealthRouter
from omni_console.slices.models.models_router import ModelsRouter
from omni_console.slices.settings.settings_router import SettingsRouter
from omni_console.slices.speedtest.speedtest_router import SpeedTestRouter
from omni_console.slices.state import ConsoleState


class OmniConsoleApp:
    """Main application class for the Omni Console."""

    def __init__(self, config: Optional[Config] = None, registry: Optional[ProviderRegistry] = None,
                 setup_logging: bool = True):
        self.config = config or Config()

        # Setup logging
        if setup_logging:
            LoggingManager.setup_logging(self.config.log_level, self.config.library_log_levels)

        # Load settings and catalog, wire the adapters
        self.state = ConsoleState.from_config(self.config, registry)

        # Create FastAPI app
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
        )

        # Mount slices
        self.app.include_router(HealthRouter.get_router(self.state))
        self.app.include_router(SettingsRouter.get_router(self.state))
        self.app.include_router(ModelsRouter.get_router(self.state))
        self.app.include_router(ChatRouter.get_router(self.state))
        self.app.include_router(SpeedTestRouter.get_router(self.state))


def create_app(config: Optional[Config] = None, registry: Optional[ProviderRegistry] = None) -> FastAPI:
    return OmniConsoleApp(config, registry).app


if __name__ == "__main__":
    import uvicorn

    server_config = Config()
    uvicorn.run(create_app(server_config), host=server_config.server_host, port=server_config.server_port)
