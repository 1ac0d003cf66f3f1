"""Shared test configuration and fixtures for all tests."""

import pytest

from omni_console.shared.models import AppSettings, ModelOption, Provider
from .test_const import (
    TEST_ANTHROPIC_BASE,
    TEST_ANTHROPIC_MODEL,
    TEST_API_KEY,
    TEST_GEMINI_BASE,
    TEST_GEMINI_MODEL,
    TEST_OPENAI_BASE,
    TEST_OPENAI_MODEL,
)


@pytest.fixture
def app_settings():
    """Settings with every provider enabled, keyed and pointed at test hosts."""
    settings = AppSettings()
    settings.openai.base_url = TEST_OPENAI_BASE
    settings.openai.api_key = TEST_API_KEY
    settings.anthropic.base_url = TEST_ANTHROPIC_BASE
    settings.anthropic.api_key = TEST_API_KEY
    settings.google.base_url = TEST_GEMINI_BASE
    settings.google.api_key = TEST_API_KEY
    return settings


@pytest.fixture
def three_models():
    """One model per provider, in a fixed order."""
    return [
        ModelOption(id=TEST_GEMINI_MODEL, name="Gemini 2.0 Flash", provider=Provider.GOOGLE),
        ModelOption(id=TEST_OPENAI_MODEL, name="GPT-4o", provider=Provider.OPENAI),
        ModelOption(id=TEST_ANTHROPIC_MODEL, name="Claude 3.5 Sonnet", provider=Provider.ANTHROPIC),
    ]
