"""
LLM-specific exceptions.

Providers raise these; the Translation Gateway converts them into Err results
so they never cross the unit boundary.
"""


class ProviderError(Exception):
    """
    Base class for translation provider failures.

    Attributes:
        provider: Provider name ("claude", "openai")
    """
    def __init__(self, message: str, provider: str = None):
        super().__init__(message)
        self.provider = provider


class MissingApiKeyError(ProviderError):
    """Raised when the selected provider has no API key configured."""
    pass


class ProviderHTTPError(ProviderError):
    """
    Raised when the provider answers with a non-success status.

    Attributes:
        status_code: HTTP status
        body: First 500 characters of the response body
    """
    def __init__(self, message: str, provider: str = None, status_code: int = None, body: str = ""):
        super().__init__(message, provider)
        self.status_code = status_code
        self.body = body


class ProviderTimeoutError(ProviderError):
    """Raised when every attempt timed out."""
    pass


class ProviderResponseError(ProviderError):
    """Raised when the response is not valid JSON or holds no usable text."""
    pass
