"""Outcome of an expected-negative check ("is the banner there?").

``SynchronizationEngine.check`` returns one of these instead of raising,
so callers branch on presence without catching ``WaitTimeoutError``.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass
class Success(Generic[T]):
    """The condition held; ``value`` is the UI reference it produced."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass
class Failure:
    """The condition did not hold within the probe budget."""

    error: str
    exception: Optional[Exception] = None

    @property
    def error_kind(self) -> str:
        """Name of the typed failure, e.g. ``WaitTimeoutError``."""
        return type(self.exception).__name__ if self.exception else "Failure"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def __repr__(self) -> str:
        if self.exception:
            return f"Failure(error={self.error!r}, exception={self.error_kind})"
        return f"Failure(error={self.error!r})"


Result = Union[Success[T], Failure]


def ok(value: T) -> Success[T]:
    return Success(value)


def err(error: str, exception: Optional[Exception] = None) -> Failure:
    """Failure carrying the message and, when there is one, the typed error."""
    return Failure(error, exception)
