"""
LLM provider abstraction.

Usage:
    from brandvoice_xliff.core.llm import create_llm_provider

    provider = create_llm_provider("claude", api_key="...")
    text = provider.translate_text(prompt, system_prompt)
"""

from .base import LLMProvider, LLMResponse
from .exceptions import (ProviderError, MissingApiKeyError, ProviderHTTPError,
                         ProviderTimeoutError, ProviderResponseError)
from .factory import create_llm_provider, create_provider_from_config
from .providers import ClaudeProvider, OpenAIProvider

__all__ = [
    'LLMProvider',
    'LLMResponse',
    'ProviderError',
    'MissingApiKeyError',
    'ProviderHTTPError',
    'ProviderTimeoutError',
    'ProviderResponseError',
    'create_llm_provider',
    'create_provider_from_config',
    'ClaudeProvider',
    'OpenAIProvider',
]
