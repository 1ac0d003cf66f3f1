"""Sequential endpoint speed test across the configured models."""
import logging
from dataclasses import replace
from typing import AsyncIterator, Callable, Iterable, List, Optional

from omni_console.providers.exceptions import ProviderError, error_kind
from omni_console.providers.registry import ProviderRegistry
from omni_console.shared.models import AppSettings, ModelOption
from .constants import BenchmarkConstants
from .models import SpeedTestResult, SpeedTestStatus


# Configure logging
logger = logging.getLogger(__name__)

INTERRUPTED_MESSAGE = "Speed test was interrupted before this model finished"


class SpeedTest:
    """Runs the probe prompt against each model of enabled providers, one at a time.

    Requests are never overlapped so one model's measurement is not skewed by
    another's traffic. No timeout is added here beyond the adapters' request
    timeout.
    """

    def __init__(self, registry: ProviderRegistry, probe_prompt: str = BenchmarkConstants.PROBE_PROMPT):
        self.registry = registry
        self.probe_prompt = probe_prompt
        self.last_results: List[SpeedTestResult] = []

    async def iter_run(self, models: Iterable[ModelOption], settings: AppSettings) -> AsyncIterator[SpeedTestResult]:
        """
        Run the speed test, yielding every state transition as it happens.

        Each model yields a LOADING snapshot when its request starts and a SUCCESS
        or ERROR snapshot when it finishes, in input order. A failing model is
        recorded and the run moves on.

        Args:
            models: Candidate models; those of disabled providers are skipped.
            settings: Settings read for every request.

        Yields:
            Snapshots of SpeedTestResult.
        """
        enabled = settings.enabled_providers()
        targets = [m for m in models if m.provider in enabled]
        self.last_results = []
        logger.info(f"Speed test started for {len(targets)} models")

        try:
            for model in targets:
                result = SpeedTestResult(id=model.id, provider=model.provider, model=model.name)
                self.last_results.append(result)
                yield replace(result)

                try:
                    generation = await self.registry.generate(model, settings, self.probe_prompt)
                except ProviderError as e:
                    logger.warning(f"Speed test failed for {model.provider.value}/{model.id}: {e}")
                    result.mark_error(str(e), error_kind(e))
                except Exception as e:
                    logger.error(f"Unexpected error testing {model.provider.value}/{model.id}: {e}", exc_info=True)
                    result.mark_error(str(e) or type(e).__name__, error_kind(e))
                else:
                    logger.info(f"{model.provider.value}/{model.id}: latency={generation.latency_ms}ms ttft={generation.ttft_ms}ms")
                    result.mark_success(generation.latency_ms, generation.ttft_ms)
                yield replace(result)
        finally:
            # Results still loading when the run is closed or cancelled become errors
            for result in self.last_results:
                if result.status is SpeedTestStatus.LOADING:
                    logger.warning(f"Speed test interrupted before {result.provider.value}/{result.id} finished")
                    result.mark_error(INTERRUPTED_MESSAGE)

        logger.info("Speed test finished")

    async def run(
        self,
        models: Iterable[ModelOption],
        settings: AppSettings,
        on_update: Optional[Callable[[SpeedTestResult], None]] = None,
    ) -> List[SpeedTestResult]:
        """Run to completion and return the final results in run order."""
        async for snapshot in self.iter_run(models, settings):
            if on_update is not None:
                on_update(snapshot)
        return list(self.last_results)
