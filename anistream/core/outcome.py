"""
Outcome - Internal success/failure carrier for pipeline steps.

Pipeline steps return an Outcome instead of raising so that callers can
see why a step produced nothing. The public query surface converts a
failed Outcome into an empty result.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one pipeline step: either a value or the error that stopped it."""

    value: Optional[T] = None
    error: Optional[Exception] = None
    step: Optional[str] = None

    @classmethod
    def success(cls, value: T, step: Optional[str] = None) -> "Outcome[T]":
        return cls(value=value, step=step)

    @classmethod
    def failure(cls, error: Exception, step: Optional[str] = None) -> "Outcome[T]":
        return cls(error=error, step=step)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default when the step failed or found nothing."""
        if self.error is not None or self.value is None:
            return default
        return self.value

    def describe(self) -> str:
        """Short diagnostic used in log messages."""
        if self.ok:
            return f"{self.step or 'step'} succeeded"
        return f"{self.step or 'step'} failed: {self.error}"


__all__ = ["Outcome"]
