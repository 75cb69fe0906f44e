"""Result type for explicit success/failure handling.

Operations that a presentation collaborator can call with stale or bad input
(accepting the wrong fish, selling after the round ended, offering twice)
return a Result instead of raising. The surrounding real-time loop checks the
Result, logs the error and carries on.

Usage:
------
    result = socket.accept(instance)
    if result.is_err():
        logger.warning(result.error)

Note: Uses `from __future__ import annotations` so the generic aliases below
stay cheap at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful operation result.

    Example:
        def register_sale(self, price: float) -> Result[float, str]:
            if not self.round_active:
                return Err("No active round")
            return Ok(self.round_money)
    """

    value: T

    def is_ok(self) -> bool:
        """Always returns True for Ok."""
        return True

    def is_err(self) -> bool:
        """Always returns False for Ok."""
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    @property
    def error(self) -> None:
        """Ok has no error, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a failed operation result.

    Example:
        def accept(self, instance: FishInstance) -> Result[FishInstance, str]:
            if self._pending is not instance:
                return Err("Instance is not the pending offer")
            return Ok(instance)
    """

    error: E

    def is_ok(self) -> bool:
        """Always returns False for Err."""
        return False

    def is_err(self) -> bool:
        """Always returns True for Err."""
        return True

    def unwrap(self) -> T:
        """Raises ValueError since Err has no success value.

        Don't call this without checking is_ok() first!
        """
        raise ValueError(f"Called unwrap on Err: {self.error}")

    @property
    def value(self) -> None:
        """Err has no value, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Result is a union of Ok and Err
Result = Union[Ok[T], Err[E]]

# Operation that returns nothing on success but might fail
UnitResult = Result[None, str]
