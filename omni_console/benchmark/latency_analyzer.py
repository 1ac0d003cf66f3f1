"""Analyzes and computes latency statistics."""
import logging
from typing import List, Optional
import numpy as np

from .models import SpeedStats, SpeedTestResult, SpeedTestStatus


# Configure logging
logger = logging.getLogger(__name__)


class LatencyAnalyzer:
    """Analyzes and computes latency statistics."""

    @staticmethod
    def compute_stats(results: List[SpeedTestResult]) -> Optional[SpeedStats]:
        """
        Summarize the successful results of a run.

        Args:
            results: Speed test results in run order.

        Returns:
            SpeedStats, or None when no model succeeded.
        """
        successful = [r for r in results if r.status is SpeedTestStatus.SUCCESS]
        if not successful:
            return None

        # min() keeps the first of equal latencies, matching run order
        fastest = min(successful, key=lambda r: r.latency)
        latencies = np.array([r.latency for r in successful], dtype=float)
        ttfts = np.array([r.ttft or 0 for r in successful], dtype=float)

        return SpeedStats(
            fastest=fastest,
            avg_latency=int(round(float(latencies.mean()))),
            avg_ttft=int(round(float(ttfts.mean()))),
            count=len(successful),
            p50=float(np.percentile(latencies, 50)),
            p90=float(np.percentile(latencies, 90)),
            p95=float(np.percentile(latencies, 95)),
        )
