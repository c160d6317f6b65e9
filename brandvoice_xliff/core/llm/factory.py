"""
Provider factory.
"""

from typing import Optional

from brandvoice_xliff.config import SUPPORTED_PROVIDERS, TranslationConfig
from brandvoice_xliff.core.xliff.exceptions import ConfigurationError
from .base import LLMProvider
from .exceptions import MissingApiKeyError
from .providers import ClaudeProvider, OpenAIProvider


def create_llm_provider(provider_type: str = "claude", **kwargs) -> LLMProvider:
    """
    Factory function to create LLM providers.

    Args:
        provider_type: "claude" or "openai"
        **kwargs: api_key, model, api_endpoint and any LLMProvider argument

    Raises:
        ConfigurationError: Unknown provider
        MissingApiKeyError: No API key given
    """
    provider_type = (provider_type or "").lower()
    if provider_type not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unknown provider type: {provider_type} (supported: {', '.join(SUPPORTED_PROVIDERS)})")

    if not kwargs.get("api_key"):
        env_var = "CLAUDE_API_KEY" if provider_type == "claude" else "OPENAI_API_KEY"
        raise MissingApiKeyError(
            f"{provider_type} provider requires an API key. Set {env_var} in .env or the environment.",
            provider=provider_type)

    # None means "provider default"
    kwargs = {key: value for key, value in kwargs.items() if value is not None}

    if provider_type == "claude":
        return ClaudeProvider(**kwargs)
    return OpenAIProvider(**kwargs)


def create_provider_from_config(config: TranslationConfig, **kwargs) -> LLMProvider:
    """Build the provider selected in a TranslationConfig"""
    return create_llm_provider(
        config.llm_provider,
        api_key=config.api_key_for(),
        model=config.model,
        timeout=config.timeout,
        max_attempts=config.max_attempts,
        retry_delay=config.retry_delay,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        **kwargs
    )
