"""
Values -- Immutable, self-validating time value objects.

Responsibility:
    Provides Duration, the exact elapsed-time value every node of a time
    summary carries. Durations replace raw floats wherever recorded time
    appears in domain logic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies except invoice_kernel.exceptions.

Invariants enforced:
    - Durations are held as an exact Decimal number of seconds (never float)
    - Durations are never negative

Failure modes:
    - NegativeDurationError on construction (or subtraction) below zero
    - ValueError on construction with an unparseable second count, or
      multiplication by an unparseable factor
    - TypeError when arithmetic mixes Duration with unsupported types
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from invoice_kernel.exceptions import NegativeDurationError

SECONDS_PER_MINUTE = Decimal("60")
SECONDS_PER_HOUR = Decimal("3600")


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid time value: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Time value must be finite: {value!r}")
    return result


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """
    Exact elapsed time.

    Contract:
        Wraps a Decimal count of seconds with arbitrary precision. All
        rounding in the kernel operates on this exact value; conversion to
        hours is only for display and charge computation.

    Guarantees:
        - Immutable, hashable and totally ordered
        - seconds is always a finite, non-negative Decimal
        - Arithmetic returns new Duration instances

    Non-goals:
        - No calendar or time-zone semantics; a Duration is a length of time,
          not an interval anchored to a date.
        - Does NOT auto-round -- see invoice_kernel.domain.rounding.
    """

    seconds: Decimal

    def __post_init__(self) -> None:
        seconds = _to_decimal(self.seconds)
        if seconds < 0:
            raise NegativeDurationError(str(seconds))
        object.__setattr__(self, "seconds", seconds)

    @classmethod
    def zero(cls) -> Duration:
        return cls(Decimal("0"))

    @classmethod
    def of_seconds(cls, seconds: Decimal | int | float | str) -> Duration:
        return cls(_to_decimal(seconds))

    @classmethod
    def of_minutes(cls, minutes: Decimal | int | float | str) -> Duration:
        return cls(_to_decimal(minutes) * SECONDS_PER_MINUTE)

    @classmethod
    def of_hours(cls, hours: Decimal | int | float | str) -> Duration:
        """
        Create a Duration from an hour count.

        Floats go through str() first, so ``of_hours(2.33)`` is exactly
        2.33 hours rather than the nearest binary fraction.
        """
        return cls(_to_decimal(hours) * SECONDS_PER_HOUR)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        # Integer arithmetic keeps microseconds exact
        micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(Decimal(micros) / Decimal(1_000_000))

    @property
    def hours(self) -> Decimal:
        """The hour-equivalent value of this duration."""
        return self.seconds / SECONDS_PER_HOUR

    @property
    def is_zero(self) -> bool:
        return self.seconds == 0

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds + other.seconds)

    def __radd__(self, other: Duration | int) -> Duration:
        # Lets sum() start from its default of 0
        if other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds - other.seconds)

    def __mul__(self, factor: Decimal | int | str) -> Duration:
        """Multiply by a scalar."""
        if isinstance(factor, (int, str)) and not isinstance(factor, bool):
            factor = _to_decimal(factor)
        if not isinstance(factor, Decimal):
            return NotImplemented
        return Duration(self.seconds * factor)

    def __rmul__(self, factor: Decimal | int | str) -> Duration:
        return self.__mul__(factor)

    def __str__(self) -> str:
        return f"{self.hours.normalize():f}h"

    def __repr__(self) -> str:
        return f"Duration(seconds={self.seconds!r})"
