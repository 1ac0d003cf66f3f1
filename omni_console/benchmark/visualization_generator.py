"""Generates visualizations from speed test results."""
import logging
from pathlib import Path
from typing import List, Union
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .constants import BenchmarkConstants
from .models import SpeedTestResult, SpeedTestStatus


# Configure logging
logger = logging.getLogger(__name__)


class VisualizationGenerator:
    """Generates visualizations from speed test results."""

    def plot_results(self, results: List[SpeedTestResult], output_path: Union[Path, str]) -> bool:
        """
        Draw total latency and TTFT per successful model as horizontal bars.

        Args:
            results: Speed test results.
            output_path: Path to save plot.

        Returns:
            False when there was nothing to plot.
        """
        successful = [r for r in results if r.status is SpeedTestStatus.SUCCESS]
        if not successful:
            logger.warning("No successful results to plot. Skipping graph.")
            return False

        labels = [f"{r.model} ({r.provider.value})" for r in successful]
        latency = [r.latency for r in successful]
        ttft = [r.ttft or 0 for r in successful]
        y = np.arange(len(successful))
        height = BenchmarkConstants.GRAPH_BAR_HEIGHT

        fig_height = max(BenchmarkConstants.GRAPH_MIN_HEIGHT_INCHES, BenchmarkConstants.GRAPH_ROW_INCHES * len(successful))
        fig, ax = plt.subplots(figsize=(BenchmarkConstants.GRAPH_WIDTH_INCHES, fig_height))
        bars1 = ax.barh(y - height / 2, latency, height, label="Total latency")
        bars2 = ax.barh(y + height / 2, ttft, height, label="TTFT")

        # Add values at the end of bars
        for bar, val in zip(list(bars1) + list(bars2), latency + ttft):
            ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2, f" {val}", va='center', fontsize=8)

        ax.set_yticks(y)
        ax.set_yticklabels(labels)
        ax.invert_yaxis()
        ax.set_xlabel("Milliseconds")
        ax.set_title("Latency Comparison (ms)")
        ax.legend()
        ax.grid(True, axis='x', linestyle='--', alpha=0.5)

        plt.tight_layout()
        plt.savefig(output_path)
        plt.close(fig)
        logger.info(f"Graph saved: {output_path}")
        return True
