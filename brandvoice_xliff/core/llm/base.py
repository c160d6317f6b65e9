"""
Base classes and data structures for LLM providers.

This module defines the abstract base class that all LLM providers must implement,
as well as common data structures like LLMResponse.

Requests are synchronous: the translator sends one request at a time and waits
for it, so a blocking httpx.Client is shared by all calls of a provider.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import httpx

from brandvoice_xliff.config import (MAX_TRANSLATION_ATTEMPTS, REQUEST_TIMEOUT,
                                     RETRY_DELAY_SECONDS, TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT)
from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger, get_logger
from .exceptions import (MissingApiKeyError, ProviderError, ProviderHTTPError,
                         ProviderResponseError, ProviderTimeoutError)
from .utils.extraction import TranslationExtractor

# Statuses worth another attempt; other 4xx answers will not change on retry
RETRYABLE_STATUS_CODES = {408, 409, 425, 429, 500, 502, 503, 504, 529}


@dataclass
class LLMResponse:
    """Response from LLM with token usage information"""
    content: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    execution_time: float = 0.0
    attempts: int = 1


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    name = "base"

    def __init__(self, model: str, api_key: str, api_endpoint: str,
                 timeout: int = REQUEST_TIMEOUT,
                 max_attempts: int = MAX_TRANSLATION_ATTEMPTS,
                 retry_delay: float = RETRY_DELAY_SECONDS,
                 client: Optional[httpx.Client] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[UnifiedLogger] = None):
        """
        Initialize the LLM provider.

        Args:
            model: Model name/identifier
            api_key: Provider API key
            api_endpoint: Full URL of the completion endpoint
            timeout: Per-request timeout in seconds
            max_attempts: Attempts per request before giving up
            retry_delay: Pause between attempts in seconds
            client: Optional preconfigured httpx.Client (tests pass a MockTransport client)
            sleep: Pause function used between attempts
            logger: Logger, defaults to the global one
        """
        self.model = model
        self.api_key = api_key
        self.api_endpoint = api_endpoint
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.logger = logger or get_logger()
        self._sleep = sleep
        self._extractor = TranslationExtractor(TRANSLATE_TAG_IN, TRANSLATE_TAG_OUT)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        """Get or create a persistent HTTP client with connection pooling"""
        if self._client is None:
            self._client = httpx.Client(
                limits=httpx.Limits(max_keepalive_connections=2, max_connections=4),
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    def close(self):
        """Close the HTTP client (only if this provider created it)"""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @abstractmethod
    def _build_request(self, prompt: str, system_prompt: Optional[str]) -> Tuple[Dict[str, str], Dict[str, Any]]:
        """Return (headers, JSON payload) for one completion request"""
        pass

    @abstractmethod
    def _parse_response(self, response_json: Dict[str, Any]) -> LLMResponse:
        """Turn the provider's JSON body into an LLMResponse"""
        pass

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> LLMResponse:
        """
        Generate text from prompt.

        Args:
            prompt: The user prompt (content to process)
            system_prompt: Optional system prompt (role/instructions)

        Returns:
            LLMResponse with the raw content

        Raises:
            MissingApiKeyError: No API key configured
            ProviderTimeoutError: Every attempt timed out
            ProviderHTTPError: Non-success status after retries (or a non-retryable one)
            ProviderResponseError: Unusable response body after retries
        """
        if not self.api_key:
            raise MissingApiKeyError(f"{self.name} provider requires an API key", provider=self.name)

        headers, payload = self._build_request(prompt, system_prompt)
        self.logger.debug("LLM Request", LogType.LLM_REQUEST, data={
            'provider': self.name, 'model': self.model,
            'system_prompt': system_prompt, 'user_prompt': prompt,
        })

        client = self._get_client()
        last_error: Optional[ProviderError] = None

        for attempt in range(self.max_attempts):
            start = time.time()
            try:
                response = client.post(self.api_endpoint, json=payload, headers=headers, timeout=self.timeout)
                response.raise_for_status()
                result = self._parse_response(response.json())
                result.execution_time = time.time() - start
                result.attempts = attempt + 1
                self.logger.debug("LLM Response", LogType.LLM_RESPONSE, data={
                    'execution_time': result.execution_time, 'response': result.content,
                })
                return result

            except httpx.TimeoutException as e:
                last_error = ProviderTimeoutError(f"{self.name} API timeout: {e}", provider=self.name)
            except httpx.HTTPStatusError as e:
                body = e.response.text[:500] if e.response is not None else ""
                status = e.response.status_code if e.response is not None else None
                last_error = ProviderHTTPError(f"{self.name} API HTTP error {status}: {body}",
                                               provider=self.name, status_code=status, body=body)
                if status not in RETRYABLE_STATUS_CODES:
                    raise last_error from e
            except httpx.RequestError as e:
                last_error = ProviderError(f"{self.name} API request failed: {e}", provider=self.name)
            except (ValueError, KeyError, IndexError, TypeError) as e:
                last_error = ProviderResponseError(f"{self.name} API returned an unusable response: {e}",
                                                   provider=self.name)

            self.logger.warning(f"{last_error} (attempt {attempt + 1}/{self.max_attempts})")
            if attempt < self.max_attempts - 1:
                self._sleep(self.retry_delay)

        raise last_error

    def translate_text(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Complete translation workflow: request + extraction.

        Returns the text between the translation tags, or the whole response
        (minus think blocks) when the provider ignored the tags.

        Raises:
            ProviderError: On request failure or an empty translation
        """
        response = self.generate(prompt, system_prompt)
        translation = self._extractor.extract_or_raw(response.content)
        if not translation:
            raise ProviderResponseError(f"{self.name} API returned an empty translation", provider=self.name)
        return translation
