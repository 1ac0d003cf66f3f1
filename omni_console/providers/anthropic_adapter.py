import time
from typing import Any, Callable, List, Optional

import httpx

from omni_console.const import (
    ANTHROPIC_DELTA_EVENT,
    ANTHROPIC_MAX_TOKENS,
    ANTHROPIC_MODEL_MARKERS,
    ANTHROPIC_VERSION,
    DEFAULT_REQUEST_TIMEOUT,
    HTTP_METHOD_NOT_ALLOWED,
    HTTP_NOT_FOUND,
)
from omni_console.shared.models import ModelOption, Provider
from .base import GenerationResult
from .exceptions import DiscoveryUnsupportedError, RequestError
from .http import fetch_json, join_url, require_api_key, stream_generation


class AnthropicAdapter:
    """Anthropic Messages API with typed streaming events."""

    provider = Provider.ANTHROPIC

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._clock = clock

    @staticmethod
    def _headers(api_key: str) -> dict:
        return {
            "content-type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    @staticmethod
    def extract_fragment(event: Any) -> Optional[str]:
        """Only ``content_block_delta`` events carry text; every other event type is ignored."""
        if not isinstance(event, dict) or event.get("type") != ANTHROPIC_DELTA_EVENT:
            return None
        delta = event.get("delta")
        if not isinstance(delta, dict):
            return None
        text = delta.get("text")
        return text if isinstance(text, str) else None

    async def generate(
        self,
        base_url: str,
        api_key: str,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> GenerationResult:
        key = require_api_key(api_key, "Anthropic")
        body = {
            "model": model_id,
            "max_tokens": ANTHROPIC_MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
            "stream": True,
        }
        if system_instruction:
            body["system"] = system_instruction

        return await stream_generation(
            client=self._client,
            timeout=self._timeout,
            provider_name=self.provider.value,
            url=join_url(base_url, "/messages"),
            headers=self._headers(key),
            body=body,
            extract=self.extract_fragment,
            clock=self._clock,
        )

    async def list_models(self, base_url: str, api_key: str) -> List[ModelOption]:
        key = require_api_key(api_key, "Anthropic")
        try:
            payload = await fetch_json(
                client=self._client,
                timeout=self._timeout,
                provider_name=self.provider.value,
                url=join_url(base_url, "/models"),
                headers=self._headers(key),
            )
        except RequestError as exc:
            if exc.status in (HTTP_NOT_FOUND, HTTP_METHOD_NOT_ALLOWED):
                raise DiscoveryUnsupportedError(
                    "Auto-fetch is not supported by this Claude endpoint. Add models manually."
                ) from exc
            raise

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            return []

        out: List[ModelOption] = []
        for row in data:
            if not isinstance(row, dict):
                continue
            model_id = str(row.get("id") or "").strip()
            if not model_id or not any(marker in model_id for marker in ANTHROPIC_MODEL_MARKERS):
                continue
            name = str(row.get("display_name") or model_id).strip() or model_id
            out.append(ModelOption(id=model_id, name=name, provider=self.provider))
        return out


__all__ = ["AnthropicAdapter"]
