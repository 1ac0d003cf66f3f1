"""Speed test package initialization."""
from .models import SpeedStats, SpeedTestResult, SpeedTestStatus
from .constants import BenchmarkConstants
from .exceptions import BenchmarkExecutionError, InvalidTransitionError
from .speed_test import SpeedTest
from .latency_analyzer import LatencyAnalyzer
from .result_exporter import ResultExporter
from .visualization_generator import VisualizationGenerator
from .runner import BenchmarkRunner

__all__ = [
    'SpeedStats',
    'SpeedTestResult',
    'SpeedTestStatus',
    'BenchmarkConstants',
    'BenchmarkExecutionError',
    'InvalidTransitionError',
    'SpeedTest',
    'LatencyAnalyzer',
    'ResultExporter',
    'VisualizationGenerator',
    'BenchmarkRunner'
]
