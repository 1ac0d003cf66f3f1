"""Unit tests for speed test CSV export, graphs and the benchmark runner."""

import pandas as pd
import pytest

from omni_console.benchmark import (
    BenchmarkExecutionError,
    BenchmarkRunner,
    LatencyAnalyzer,
    ResultExporter,
    SpeedTestResult,
    SpeedTestStatus,
    VisualizationGenerator,
)
from omni_console.providers import ProviderRegistry
from omni_console.shared.config import Config
from omni_console.shared.models import ModelOption, Provider
from omni_console.shared.settings_store import SettingsStore
from tests.helpers import RecordingHandler, mock_client, openai_chunk, sse, streaming_response


def sample_results():
    ok = SpeedTestResult(id="gpt-4o", provider=Provider.OPENAI, model="GPT-4o", timestamp=1000)
    ok.mark_success(250, 90)
    failed = SpeedTestResult(id="claude-x", provider=Provider.ANTHROPIC, model="Claude X", timestamp=2000)
    failed.mark_error("Overloaded", "request")
    return [ok, failed]


class TestResultExporter:
    """Test CSV export and reload."""

    def test_save_and_load(self, tmp_path):
        """Test results survive a CSV round trip field by field."""
        path = tmp_path / "results.csv"

        ResultExporter.save_results(sample_results(), path)
        loaded = ResultExporter.load_results(path)

        assert [(r.id, r.provider, r.status) for r in loaded] == [
            ("gpt-4o", Provider.OPENAI, SpeedTestStatus.SUCCESS),
            ("claude-x", Provider.ANTHROPIC, SpeedTestStatus.ERROR),
        ]
        assert loaded[0].latency == 250 and loaded[0].ttft == 90 and loaded[0].error_msg is None
        assert loaded[1].ttft is None and loaded[1].error_msg == "Overloaded"
        assert loaded[1].timestamp == 2000

    def test_summary(self, tmp_path):
        """Test the summary is a single row."""
        path = tmp_path / "summary.csv"
        stats = LatencyAnalyzer.compute_stats(sample_results())

        ResultExporter.save_summary(stats, path)

        df = pd.read_csv(path)
        assert len(df) == 1
        assert df.loc[0, "fastest_model"] == "GPT-4o"
        assert df.loc[0, "successful"] == 1


class TestVisualizationGenerator:
    """Test latency graphs."""

    def test_plot_written(self, tmp_path):
        """Test a PNG is produced for successful results."""
        path = tmp_path / "latency.png"

        assert VisualizationGenerator().plot_results(sample_results(), path) is True
        assert path.stat().st_size > 0

    def test_nothing_to_plot(self, tmp_path):
        """Test no file is written when every model failed."""
        path = tmp_path / "latency.png"

        assert VisualizationGenerator().plot_results(sample_results()[1:], path) is False
        assert not path.exists()


class TestBenchmarkRunner:
    """Test the end to end benchmark run."""

    @pytest.fixture
    def config(self, tmp_path):
        return Config(
            settings_path=tmp_path / "settings.json",
            models_path=tmp_path / "models.json",
            bench_dir=tmp_path / "bench",
        )

    @pytest.mark.asyncio
    async def test_run_writes_reports(self, config, app_settings):
        """Test a run against the stored catalog writes results, summary and graph."""
        store = SettingsStore.from_config(config)
        store.save_settings(app_settings)
        store.save_models([
            ModelOption(id="gpt-4o", name="GPT-4o", provider=Provider.OPENAI),
            ModelOption(id="gpt-4o-mini", name="GPT-4o mini", provider=Provider.OPENAI),
        ])
        handler = RecordingHandler(streaming_response([sse(openai_chunk("pong"), "[DONE]")]))
        runner = BenchmarkRunner(config, registry=ProviderRegistry(client=mock_client(handler)))

        results = await runner.run_async()

        assert [r.status for r in results] == [SpeedTestStatus.SUCCESS, SpeedTestStatus.SUCCESS]
        assert len(handler.requests) == 2
        assert handler.last_json["messages"][-1]["content"] == "Ping"
        assert (config.bench_dir / "speedtest_results.csv").exists()
        assert (config.bench_dir / "speedtest_summary.csv").exists()
        assert (config.bench_dir / "speedtest_latency.png").exists()

    @pytest.mark.asyncio
    async def test_empty_catalog(self, config):
        """Test running without models is refused."""
        runner = BenchmarkRunner(config, registry=ProviderRegistry(adapters={}))

        with pytest.raises(BenchmarkExecutionError):
            await runner.run_async()

    @pytest.mark.asyncio
    async def test_load_only(self, config):
        """Test load-only mode replots saved results without any request."""
        config.bench_dir.mkdir(parents=True)
        ResultExporter.save_results(sample_results(), config.bench_dir / "speedtest_results.csv")
        runner = BenchmarkRunner(config, run_tests=False, registry=ProviderRegistry(adapters={}))

        results = await runner.run_async()

        assert len(results) == 2
        assert (config.bench_dir / "speedtest_latency.png").exists()

    @pytest.mark.asyncio
    async def test_load_only_without_results(self, config):
        """Test load-only mode fails when nothing was saved."""
        runner = BenchmarkRunner(config, run_tests=False, registry=ProviderRegistry(adapters={}))

        with pytest.raises(BenchmarkExecutionError):
            await runner.run_async()
