"""
TimeEntry capability shared by every node of a time summary.

TimeSummary, ProjectTimeSummary and Detail all expose a ``time`` value
(for TimeSummary it is the grand total). Code that only needs the number,
such as the rounding engine or a report column, is written once against
these protocols instead of once per node kind.
"""

from __future__ import annotations

from typing import Protocol, Self, runtime_checkable

from invoice_kernel.domain.values import Duration


@runtime_checkable
class TimeEntry(Protocol):
    """Anything that can report its current time value."""

    @property
    def time(self) -> Duration: ...


@runtime_checkable
class ReconcilableEntry(TimeEntry, Protocol):
    """A TimeEntry that can produce a copy of itself with a new time."""

    def with_time(self, time: Duration) -> Self: ...


def entry_time(entry: TimeEntry) -> Duration:
    """Return the representative time of any summary node."""
    return entry.time
