"""
Result type for explicit error handling.

The Translation Gateway returns these instead of raising so that a failing
provider call can never abort the per-unit loop.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')  # Success type
E = TypeVar('E')  # Error type


@dataclass
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: The successful value
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value (safe for Ok)."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass
class Err(Generic[E]):
    """Error result.

    Attributes:
        error: The error value (usually a ProviderError)
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError (unsafe for Err)."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        """Get default value."""
        return default


# Type alias for Result
Result = Union[Ok[T], Err[E]]
