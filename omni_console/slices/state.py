"""Application state shared by the HTTP slices."""
import logging
from typing import Optional

from omni_console.benchmark.models import SpeedStats
from omni_console.benchmark.latency_analyzer import LatencyAnalyzer
from omni_console.benchmark.speed_test import SpeedTest
from omni_console.providers.registry import ProviderRegistry
from omni_console.shared.catalog import ModelCatalog
from omni_console.shared.config import Config
from omni_console.shared.models import AppSettings
from omni_console.shared.settings_store import SettingsStore
from omni_console.slices.chat.chat_session import ChatSession


logger = logging.getLogger(__name__)


class ConsoleState:
    """Owns the current settings and catalog; mutations are written through the store."""

    def __init__(self, config: Config, store: SettingsStore, registry: ProviderRegistry):
        self.config = config
        self.store = store
        self.registry = registry
        self.settings: AppSettings = store.load_settings()
        self.catalog = ModelCatalog(store.load_models(), on_change=store.save_models)
        self.chat = ChatSession(registry, system_prompt=config.system_prompt)
        self.speed_test = SpeedTest(registry, probe_prompt=config.probe_prompt)
        self.speed_test_running = False

    @classmethod
    def from_config(cls, config: Config, registry: Optional[ProviderRegistry] = None) -> 'ConsoleState':
        return cls(config, SettingsStore.from_config(config),
                   registry or ProviderRegistry(timeout=config.request_timeout))

    def update_settings(self, settings: AppSettings) -> None:
        self.settings = settings
        self.store.save_settings(settings)
        logger.info("Settings updated")

    def speed_stats(self) -> Optional[SpeedStats]:
        return LatencyAnalyzer.compute_stats(self.speed_test.last_results)
