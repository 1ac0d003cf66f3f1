import time
from typing import Any, Callable, List, Optional
from urllib.parse import quote

import httpx

from omni_console.const import DEFAULT_REQUEST_TIMEOUT, GEMINI_MODEL_MARKERS, GEMINI_MODEL_PREFIX
from omni_console.shared.models import ModelOption, Provider
from .base import GenerationResult
from .http import fetch_json, join_url, require_api_key, stream_generation


class GeminiAdapter:
    """Google Gemini REST API (generateContent family), key passed in the query string."""

    provider = Provider.GOOGLE

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
    def _strip_prefix(name: str) -> str:
        if name.startswith(GEMINI_MODEL_PREFIX):
            return name[len(GEMINI_MODEL_PREFIX):]
        return name

    @staticmethod
    def extract_fragment(event: Any) -> Optional[str]:
        """Return ``candidates[0].content.parts[0].text`` of a streamed response."""
        if not isinstance(event, dict):
            return None
        cands = event.get("candidates")
        if not isinstance(cands, list) or not cands or not isinstance(cands[0], dict):
            return None
        content = cands[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) else None

    async def generate(
        self,
        base_url: str,
        api_key: str,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> GenerationResult:
        key = require_api_key(api_key, "Google Gemini")
        path = f"/models/{self._strip_prefix(model_id)}:streamGenerateContent?key={quote(key, safe='')}&alt=sse"
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        return await stream_generation(
            client=self._client,
            timeout=self._timeout,
            provider_name=self.provider.value,
            url=join_url(base_url, path),
            headers={"Content-Type": "application/json"},
            body=body,
            extract=self.extract_fragment,
            clock=self._clock,
        )

    async def list_models(self, base_url: str, api_key: str) -> List[ModelOption]:
        key = require_api_key(api_key, "Google Gemini")
        payload = await fetch_json(
            client=self._client,
            timeout=self._timeout,
            provider_name=self.provider.value,
            url=join_url(base_url, f"/models?key={quote(key, safe='')}"),
            headers={"Accept": "application/json"},
        )
        rows = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            return []

        out: List[ModelOption] = []
        for r in rows:
            if not isinstance(r, dict):
                continue
            name = str(r.get("name") or "").strip()
            if not name or not any(marker in name for marker in GEMINI_MODEL_MARKERS):
                continue
            label = str(r.get("displayName") or name).strip() or name
            out.append(ModelOption(id=self._strip_prefix(name), name=label, provider=self.provider))
        return out


__all__ = ["GeminiAdapter"]
