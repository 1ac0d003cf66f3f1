"""Provider tag to adapter dispatch."""
import logging
from typing import Dict, List, Optional, Tuple

import httpx

from omni_console.const import DEFAULT_REQUEST_TIMEOUT
from omni_console.shared.models import AppSettings, ModelOption, Provider
from .anthropic_adapter import AnthropicAdapter
from .base import GenerationResult, ProviderAdapter
from .gemini_adapter import GeminiAdapter
from .openai_adapter import OpenAIAdapter
from .proxy import resolve_base_url


logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Selects the adapter for a provider and feeds it the caller's settings.

    Settings are passed into every call; the registry keeps no per-call state.
    """

    def __init__(
        self,
        adapters: Optional[Dict[Provider, ProviderAdapter]] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        if adapters is None:
            adapters = {
                Provider.GOOGLE: GeminiAdapter(client=client, timeout=timeout),
                Provider.OPENAI: OpenAIAdapter(client=client, timeout=timeout),
                Provider.ANTHROPIC: AnthropicAdapter(client=client, timeout=timeout),
            }
        self._adapters = adapters

    def get(self, provider: Provider) -> ProviderAdapter:
        try:
            return self._adapters[provider]
        except KeyError:
            raise ValueError(f"No adapter registered for {provider.value}") from None

    @staticmethod
    def endpoint_for(provider: Provider, settings: AppSettings) -> Tuple[str, str]:
        """Return (effective base URL, API key) for a provider under the given settings."""
        config = settings.config_for(provider)
        return resolve_base_url(config.base_url, settings.cors_proxy), config.api_key

    async def generate(
        self,
        model: ModelOption,
        settings: AppSettings,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> GenerationResult:
        base_url, api_key = self.endpoint_for(model.provider, settings)
        logger.debug(f"Generating with {model.provider.value}/{model.id} via {base_url}")
        return await self.get(model.provider).generate(base_url, api_key, model.id, prompt, system_instruction)

    async def list_models(self, provider: Provider, settings: AppSettings) -> List[ModelOption]:
        base_url, api_key = self.endpoint_for(provider, settings)
        logger.info(f"Listing models for {provider.value} via {base_url}")
        return await self.get(provider).list_models(base_url, api_key)
