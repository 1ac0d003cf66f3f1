from dataclasses import dataclass
from typing import List, Optional, Protocol

from omni_console.shared.models import ModelOption, Provider


@dataclass(frozen=True)
class GenerationResult:
    """Uniform outcome of a streamed generation, timings in milliseconds."""
    text: str
    latency_ms: int
    ttft_ms: int


class ProviderAdapter(Protocol):
    provider: Provider

    async def generate(
        self,
        base_url: str,
        api_key: str,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> GenerationResult: ...

    async def list_models(self, base_url: str, api_key: str) -> List[ModelOption]: ...


__all__ = ["GenerationResult", "ProviderAdapter"]
