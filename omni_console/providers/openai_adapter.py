import time
from typing import Any, Callable, List, Optional

import httpx

from omni_console.const import DEFAULT_REQUEST_TIMEOUT, OPENAI_MODEL_MARKERS
from omni_console.shared.models import ModelOption, Provider
from .base import GenerationResult
from .exceptions import InvalidResponseFormatError
from .http import fetch_json, join_url, require_api_key, stream_generation


class OpenAIAdapter:
    """OpenAI-compatible chat completions API (official endpoint or any gateway speaking it).

    Expects base_url to include the version segment (e.g. https://api.openai.com/v1).
    """

    provider = Provider.OPENAI

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
        return {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}

    @staticmethod
    def extract_fragment(event: Any) -> Optional[str]:
        """Return ``choices[0].delta.content`` of a chat completion chunk."""
        if not isinstance(event, dict):
            return None
        choices = event.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        delta = choices[0].get("delta")
        if not isinstance(delta, dict):
            return None
        content = delta.get("content")
        return content if isinstance(content, str) else None

    async def generate(
        self,
        base_url: str,
        api_key: str,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> GenerationResult:
        key = require_api_key(api_key, "OpenAI")
        body = {
            "model": model_id,
            "messages": [
                {"role": "system", "content": system_instruction or ""},
                {"role": "user", "content": prompt},
            ],
            "stream": True,
        }
        return await stream_generation(
            client=self._client,
            timeout=self._timeout,
            provider_name=self.provider.value,
            url=join_url(base_url, "/chat/completions"),
            headers=self._headers(key),
            body=body,
            extract=self.extract_fragment,
            clock=self._clock,
        )

    async def list_models(self, base_url: str, api_key: str) -> List[ModelOption]:
        key = require_api_key(api_key, "OpenAI")
        payload = await fetch_json(
            client=self._client,
            timeout=self._timeout,
            provider_name=self.provider.value,
            url=join_url(base_url, "/models"),
            headers=self._headers(key),
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise InvalidResponseFormatError("Invalid API response format")

        out: List[ModelOption] = []
        for row in data:
            model_id = str(row.get("id") or "").strip() if isinstance(row, dict) else ""
            # Heuristic allowlist; fine-tunes or other families with different ids are dropped.
            if model_id and any(marker in model_id for marker in OPENAI_MODEL_MARKERS):
                out.append(ModelOption(id=model_id, name=model_id, provider=self.provider))
        return out


__all__ = ["OpenAIAdapter"]
