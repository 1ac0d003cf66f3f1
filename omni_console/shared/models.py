"""Data models shared by the adapters, the catalog, the chat driver and the HTTP slices."""
from enum import Enum
from typing import List, Literal, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from omni_console.const import ANTHROPIC_BASE_URL, GOOGLE_BASE_URL, OPENAI_BASE_URL


class Provider(str, Enum):
    """Supported hosted LLM providers, valued by their display names."""

    GOOGLE = "Google Gemini"
    OPENAI = "OpenAI"
    ANTHROPIC = "Anthropic Claude"

    @property
    def settings_key(self) -> str:
        """Attribute name of this provider's config inside AppSettings."""
        return _SETTINGS_KEYS[self]

    @classmethod
    def from_settings_key(cls, key: str) -> "Provider":
        """Look up a provider by its settings key (google, openai, anthropic).

        Raises:
            ValueError: If the key does not name a provider.
        """
        for provider, settings_key in _SETTINGS_KEYS.items():
            if settings_key == key:
                return provider
        raise ValueError(f"Unknown provider key: {key}")


_SETTINGS_KEYS = {
    Provider.GOOGLE: "google",
    Provider.OPENAI: "openai",
    Provider.ANTHROPIC: "anthropic",
}


class CamelModel(BaseModel):
    """Base model persisted and served with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderConfig(CamelModel):
    enabled: bool = True
    base_url: str = ""
    api_key: str = ""

    @property
    def has_key(self) -> bool:
        return bool(self.api_key.strip())


class AppSettings(CamelModel):
    """User settings: one ProviderConfig per provider plus the global CORS proxy."""

    language: Literal["en", "zh"] = "en"
    theme: Literal["dark", "light"] = "dark"
    cors_proxy: str = ""
    google: ProviderConfig = Field(default_factory=lambda: ProviderConfig(base_url=GOOGLE_BASE_URL))
    openai: ProviderConfig = Field(default_factory=lambda: ProviderConfig(base_url=OPENAI_BASE_URL))
    anthropic: ProviderConfig = Field(default_factory=lambda: ProviderConfig(base_url=ANTHROPIC_BASE_URL))

    def config_for(self, provider: Provider) -> ProviderConfig:
        return getattr(self, provider.settings_key)

    def enabled_providers(self) -> Set[Provider]:
        return {provider for provider in Provider if self.config_for(provider).enabled}


class ModelOption(CamelModel):
    id: str = Field(min_length=1)
    name: str
    provider: Provider
    is_manual: bool = False
    context_window: Optional[int] = None

    @property
    def key(self) -> Tuple[str, Provider]:
        """Catalog identity of the model."""
        return (self.id, self.provider)


class Message(CamelModel):
    """Chat transcript entry. The system role marks an error rendering."""

    id: str
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: int
    provider: Optional[Provider] = None
    model: Optional[str] = None
    latency_ms: Optional[int] = None


def dump_models(models: List[CamelModel]) -> List[dict]:
    """Serialize models the way they are persisted and served."""
    return [m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in models]
