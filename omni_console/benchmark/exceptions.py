"""Custom exceptions for the speed test."""


class BenchmarkExecutionError(Exception):
    """Custom exception for benchmark execution failures."""
    pass


class InvalidTransitionError(Exception):
    """Exception raised when a finished speed test result is transitioned again."""
    pass
