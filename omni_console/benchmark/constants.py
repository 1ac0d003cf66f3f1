"""Constants for the speed test."""
from omni_console.const import PROBE_PROMPT


class BenchmarkConstants:
    """Centralized constants for speed test runs and reports."""
    PROBE_PROMPT = PROBE_PROMPT
    GRAPH_BAR_HEIGHT = 0.38
    GRAPH_ROW_INCHES = 0.6
    GRAPH_MIN_HEIGHT_INCHES = 3.0
    GRAPH_WIDTH_INCHES = 10.0
