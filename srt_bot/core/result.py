"""Result pattern for outcomes that are reported rather than raised.

Validators and the notification dispatcher hand back a ``Result`` so the
caller decides whether a rejection is worth re-prompting or just logging.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_success(self) -> bool:
        """Check if result is successful."""
        return True

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def __repr__(self) -> str:
        """String representation."""
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result."""

    error: str
    exception: Optional[E] = None

    def is_success(self) -> bool:
        """Check if result is successful."""
        return False

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return True

    def unwrap(self) -> Any:
        """
        Attempt to get value (raises exception).

        Raises:
            The wrapped exception when present, RuntimeError otherwise
        """
        if self.exception is not None:
            raise self.exception
        raise RuntimeError(f"Called unwrap on Failure: {self.error}")

    def __repr__(self) -> str:
        """String representation."""
        if self.exception is not None:
            return f"Failure(error={self.error!r}, exception={type(self.exception).__name__})"
        return f"Failure(error={self.error!r})"


# Type alias for Result
Result = Union[Success[T], Failure[E]]
