"""
Collaborator contracts consumed by the comparison engine.

Key patterns:
- Protocol-based dependency injection (storage and ownership live elsewhere)
- Generic Result type so expected failures are visible in signatures
"""

from datetime import datetime
from typing import Generic, Protocol, TypeVar

from petcompare.domain.models import Observation, PetProfile

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    A store being unreachable is an expected failure for a collaborator, so
    sources report it as a value and the service decides how to surface it.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class ObservationSource(Protocol):
    """
    Time-ranged read access to immutable per-pet observations.

    Implementations should return observations ascending by timestamp; the
    engine sorts them again before aggregating.
    """

    async def fetch_observations(
        self, pet_id: str, start: datetime, end: datetime
    ) -> Result[list[Observation], Exception]:
        """
        Fetch one pet's observations with ``start <= timestamp <= end``.

        Returns:
            Result containing the observations, or the store failure.
        """
        ...


class OwnershipGate(Protocol):
    """Resolves which of the requested pets the caller may access."""

    async def check_ownership(
        self, user_id: str, pet_ids: list[str]
    ) -> Result[list[PetProfile], Exception]:
        """
        Return the active pets among ``pet_ids`` owned by ``user_id``.

        A shorter list than requested means some ids were not accessible.
        """
        ...
