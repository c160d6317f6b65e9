"""
Custom exceptions for the XLIFF translation pipeline.

File-level problems surface as XliffTranslationError subclasses and are
recorded per job by the batch orchestrator. Unit-level provider problems
never leave the unit (see brandvoice_xliff.core.llm.exceptions).
"""


class XliffTranslationError(Exception):
    """Base exception for all XLIFF translation errors."""
    pass


class XliffNotFoundError(XliffTranslationError, FileNotFoundError):
    """Raised when the input XLIFF file does not exist.

    Attributes:
        path: The missing path
    """
    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path


class MalformedDocumentError(XliffTranslationError):
    """Raised when the input is not well-formed XML or has no <file> element.

    Attributes:
        path: The offending file
        original_error: The underlying parser error, if any
    """
    def __init__(self, message: str, path: str = None, original_error: Exception = None):
        super().__init__(message)
        self.path = path
        self.original_error = original_error


class ConfigurationError(XliffTranslationError):
    """Raised for unusable configuration (unknown provider, unreadable rule or glossary file)."""
    pass
