"""
Rounding -- tenth-hour rounding and largest-remainder reconciliation.

Responsibility:
    Round exact durations to the tenth-hour billing grid, and reconcile a
    list of sibling entries so that their rounded times add up exactly to
    an already-rounded parent total.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Used by invoice_kernel.domain.time_summary and by report code (charge).

Invariants enforced:
    - Every rounded value is a whole number of tenth-hour units (360 s).
    - reconcile output sums exactly to the parent total.
    - reconcile keeps order and count; each child moves at most one unit
      away from its own naive rounding.
    - One tie convention everywhere: half a unit rounds up (ROUND_HALF_UP),
      and equal remainders are settled by input position.

Failure modes:
    - ReconciliationInconsistencyError when the parent total is off the
      grid, when there are no children for a nonzero total, or when the
      deficit is larger than the children can absorb.
    - InvalidRateError from charge() on a negative, non-finite or
      unparseable rate.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from typing import TypeVar

from invoice_kernel.domain.time_entry import ReconcilableEntry, entry_time
from invoice_kernel.domain.values import SECONDS_PER_HOUR, Duration
from invoice_kernel.exceptions import (
    InvalidRateError,
    ReconciliationInconsistencyError,
)
from invoice_kernel.logging_config import get_logger

logger = get_logger("domain.rounding")

_UNIT_SECONDS = Decimal("360")

TENTH_HOUR = Duration(_UNIT_SECONDS)

E = TypeVar("E", bound=ReconcilableEntry)


def _naive_units(duration: Duration) -> int:
    """Nearest whole number of tenth-hour units, half rounding up."""
    # divmod on Decimal is exact, so a tie is detected exactly
    units, leftover = divmod(duration.seconds, _UNIT_SECONDS)
    if leftover * 2 >= _UNIT_SECONDS:
        units += 1
    return int(units)


def _from_units(units: int) -> Duration:
    return Duration(_UNIT_SECONDS * units)


def _hours_str(duration: Duration) -> str:
    return f"{duration.hours.normalize():f}"


def round_time(duration: Duration) -> Duration:
    """
    Round a duration to the nearest tenth of an hour.

    Exactly half a unit (3 minutes past a tenth) rounds up. Total and
    monotonic: a <= b implies round_time(a) <= round_time(b).
    """
    return _from_units(_naive_units(duration))


def is_rounded(duration: Duration) -> bool:
    """True if the duration is a whole number of tenth-hour units."""
    return duration.seconds % _UNIT_SECONDS == 0


def reconcile(children: Sequence[E], parent_rounded_total: Duration) -> list[E]:
    """
    Round sibling entries so they add up to their parent's rounded total.

    Each child is first rounded on its own. The difference between the
    parent total and the sum of those naive values is then handed out one
    tenth-hour unit at a time (largest-remainder apportionment):

    * a deficit goes to the children whose rounding lost the most time,
    * a surplus is taken from the children whose rounding gained the most,
      skipping children already at zero.

    Equal remainders are settled by input position, earliest first. The
    result has the same entries in the same order, each rebuilt through
    ``with_time``; the inputs are not modified.

    Raises:
        ReconciliationInconsistencyError: parent total off the tenth-hour
            grid, no children for a nonzero total, or a deficit larger than
            the number of children able to absorb it.
    """
    target_units, off_grid = divmod(parent_rounded_total.seconds, _UNIT_SECONDS)
    if off_grid:
        raise ReconciliationInconsistencyError(
            reason="unrounded_total",
            target_hours=_hours_str(parent_rounded_total),
            child_count=len(children),
        )

    times = [entry_time(child) for child in children]
    naive = [_naive_units(t) for t in times]
    # Positive remainder: rounding lost time. Negative: rounding added time.
    remainders = [t.seconds - _UNIT_SECONDS * units for t, units in zip(times, naive)]
    delta = int(target_units) - sum(naive)

    if not children:
        if delta:
            raise ReconciliationInconsistencyError(
                reason="no_children",
                target_hours=_hours_str(parent_rounded_total),
                child_count=0,
                delta_units=delta,
            )
        return []

    if delta > 0:
        ranked = sorted(range(len(children)), key=lambda i: -remainders[i])
        step = 1
    elif delta < 0:
        eligible = [i for i, units in enumerate(naive) if units > 0]
        ranked = sorted(eligible, key=lambda i: remainders[i])
        step = -1
    else:
        ranked = []
        step = 0

    if abs(delta) > len(ranked):
        raise ReconciliationInconsistencyError(
            reason="delta_exceeds_children",
            target_hours=_hours_str(parent_rounded_total),
            child_count=len(children),
            delta_units=delta,
        )

    adjusted = list(naive)
    for index in ranked[: abs(delta)]:
        adjusted[index] += step

    if delta:
        logger.debug("reconcile_adjusted", extra={
            "child_count": len(children),
            "delta_units": delta,
            "adjusted_positions": sorted(ranked[: abs(delta)]),
        })

    return [
        child.with_time(_from_units(units))
        for child, units in zip(children, adjusted)
    ]


def charge(duration: Duration, rate: Decimal | int | float | str) -> Decimal:
    """
    Amount billed for a duration at an hourly rate.

    No rounding is applied; display code decides how many places to show.
    Callers pass durations that have already been reconciled.
    """
    if isinstance(rate, Decimal):
        hourly = rate
    else:
        try:
            hourly = Decimal(str(rate))
        except (InvalidOperation, ValueError) as e:
            raise InvalidRateError(str(rate)) from e
    if not hourly.is_finite() or hourly < 0:
        raise InvalidRateError(str(rate))
    return duration.seconds * hourly / SECONDS_PER_HOUR
