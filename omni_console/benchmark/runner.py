"""Benchmark runner to orchestrate a speed test run and its reports."""
import asyncio
import logging
from typing import List, Optional

from omni_console.const import LATENCY_GRAPH_NAME, RESULTS_CSV_NAME, SUMMARY_CSV_NAME
from omni_console.providers.registry import ProviderRegistry
from omni_console.shared.config import Config
from omni_console.shared.settings_store import SettingsStore
from .exceptions import BenchmarkExecutionError
from .latency_analyzer import LatencyAnalyzer
from .models import SpeedTestResult, SpeedTestStatus
from .result_exporter import ResultExporter
from .speed_test import SpeedTest
from .visualization_generator import VisualizationGenerator


# Configure logging
logger = logging.getLogger(__name__)


class BenchmarkRunner:
    """Orchestrates a speed test against the stored settings and writes the reports."""

    def __init__(self, config: Config, run_tests: bool = True,
                 store: Optional[SettingsStore] = None, registry: Optional[ProviderRegistry] = None):
        self.config = config
        self.run_tests = run_tests
        self.store = store or SettingsStore.from_config(config)
        self.registry = registry or ProviderRegistry(timeout=config.request_timeout)
        self.speed_test = SpeedTest(self.registry, probe_prompt=config.probe_prompt)
        self.result_exporter = ResultExporter()
        self.visualization_generator = VisualizationGenerator()

    @staticmethod
    def _log_transition(result: SpeedTestResult) -> None:
        if result.status is SpeedTestStatus.LOADING:
            logger.info(f"Testing {result.provider.value}/{result.id}...")
        elif result.status is SpeedTestStatus.SUCCESS:
            logger.info(f"  success: latency {result.latency}ms, ttft {result.ttft}ms")
        else:
            logger.info(f"  error: {result.error_msg}")

    async def run_async(self) -> List[SpeedTestResult]:
        """Run the complete speed test process."""
        bench_dir = self.config.bench_dir
        bench_dir.mkdir(parents=True, exist_ok=True)
        results_path = bench_dir / RESULTS_CSV_NAME
        summary_path = bench_dir / SUMMARY_CSV_NAME
        graph_path = bench_dir / LATENCY_GRAPH_NAME

        if not self.run_tests:
            if not results_path.exists():
                raise BenchmarkExecutionError(f"No saved results at {results_path}; run without --load-only first")
            logger.info(f"Loading existing results from: {results_path}")
            results = self.result_exporter.load_results(results_path)
            self.visualization_generator.plot_results(results, graph_path)
            return results

        settings = self.store.load_settings()
        catalog = self.store.load_models()
        if not catalog:
            raise BenchmarkExecutionError("No models configured yet. Add models before running the speed test.")

        results = await self.speed_test.run(catalog, settings, on_update=self._log_transition)
        self.result_exporter.save_results(results, results_path)

        stats = LatencyAnalyzer.compute_stats(results)
        if stats is None:
            logger.warning("No model answered successfully")
        else:
            self.result_exporter.save_summary(stats, summary_path)
            logger.info(f"Fastest: {stats.fastest.model} ({stats.fastest.latency}ms), "
                        f"avg latency {stats.avg_latency}ms, avg ttft {stats.avg_ttft}ms over {stats.count} models")
        self.visualization_generator.plot_results(results, graph_path)
        return results

    def run(self) -> List[SpeedTestResult]:
        try:
            results = asyncio.run(self.run_async())
            logger.info("Benchmark completed successfully!")
            return results
        except Exception as e:
            logger.error(f"Benchmark failed: {e}", stack_info=True)
            raise
