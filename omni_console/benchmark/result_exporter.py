"""Handles exporting speed test results to CSV."""
import logging
from pathlib import Path
from typing import List, Union
import pandas as pd

from omni_console.shared.models import Provider
from .models import SpeedStats, SpeedTestResult, SpeedTestStatus


# Configure logging
logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["id", "provider", "model", "status", "latency_ms", "ttft_ms", "timestamp", "error"]


class ResultExporter:
    """Handles exporting speed test results to CSV."""

    @staticmethod
    def save_results(results: List[SpeedTestResult], output_path: Union[Path, str]) -> None:
        """
        Save per-model results to CSV.

        Args:
            results: Speed test results.
            output_path: Path to save CSV.
        """
        rows = [
            {
                "id": r.id,
                "provider": r.provider.value,
                "model": r.model,
                "status": r.status.value,
                "latency_ms": r.latency,
                "ttft_ms": r.ttft,
                "timestamp": r.timestamp,
                "error": r.error_msg,
            }
            for r in results
        ]
        df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
        df.to_csv(output_path, index=False)
        logger.info(f"CSV saved: {output_path}")

    @staticmethod
    def load_results(input_path: Union[Path, str]) -> List[SpeedTestResult]:
        """
        Load results from CSV without running the speed test again.

        Args:
            input_path: Path to load CSV from.

        Returns:
            Results in file order.
        """
        df = pd.read_csv(input_path, dtype={"id": str, "model": str})
        results = []
        for _, row in df.iterrows():
            ttft = row.get("ttft_ms")
            error = row.get("error")
            results.append(SpeedTestResult(
                id=row["id"],
                provider=Provider(row["provider"]),
                model=row["model"],
                status=SpeedTestStatus(row["status"]),
                latency=int(row["latency_ms"]),
                ttft=None if pd.isna(ttft) else int(ttft),
                timestamp=int(row["timestamp"]),
                error_msg=None if pd.isna(error) else str(error),
            ))
        logger.info(f"Results loaded from CSV: {input_path}")
        return results

    @staticmethod
    def save_summary(stats: SpeedStats, output_path: Union[Path, str]) -> None:
        """Save the run summary as a one-row CSV."""
        df = pd.DataFrame([{
            "fastest_model": stats.fastest.model,
            "fastest_provider": stats.fastest.provider.value,
            "fastest_latency_ms": stats.fastest.latency,
            "avg_latency_ms": stats.avg_latency,
            "avg_ttft_ms": stats.avg_ttft,
            "successful": stats.count,
            "p50_latency_ms": stats.p50,
            "p90_latency_ms": stats.p90,
            "p95_latency_ms": stats.p95,
        }])
        df.to_csv(output_path, index=False)
        logger.info(f"Summary saved to CSV: {output_path}")
