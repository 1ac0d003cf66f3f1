"""Omni Console: multi-provider LLM chat and endpoint speed testing."""

__version__ = "0.1.0"
