"""Provider adapters package initialization."""
from .base import GenerationResult, ProviderAdapter
from .exceptions import (
    DiscoveryUnsupportedError,
    EmptyBodyError,
    InvalidResponseFormatError,
    MissingCredentialError,
    ProviderError,
    RequestError,
    TransportError,
)
from .proxy import resolve_base_url
from .openai_adapter import OpenAIAdapter
from .anthropic_adapter import AnthropicAdapter
from .gemini_adapter import GeminiAdapter
from .registry import ProviderRegistry

__all__ = [
    'GenerationResult',
    'ProviderAdapter',
    'ProviderError',
    'MissingCredentialError',
    'RequestError',
    'TransportError',
    'EmptyBodyError',
    'InvalidResponseFormatError',
    'DiscoveryUnsupportedError',
    'resolve_base_url',
    'OpenAIAdapter',
    'AnthropicAdapter',
    'GeminiAdapter',
    'ProviderRegistry',
]
