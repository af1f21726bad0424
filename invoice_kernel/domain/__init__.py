"""
Pure domain layer.

This module contains the time summary value objects and the rounding
engine, with NO dependencies on:
- Configuration
- Report formatting
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from invoice_kernel.domain.rounding import (
    TENTH_HOUR,
    charge,
    is_rounded,
    reconcile,
    round_time,
)
from invoice_kernel.domain.time_entry import (
    ReconcilableEntry,
    TimeEntry,
    entry_time,
)
from invoice_kernel.domain.time_summary import (
    Detail,
    ProjectTimeSummary,
    TimeSummary,
)
from invoice_kernel.domain.values import Duration

__all__ = [
    "TENTH_HOUR",
    "Detail",
    "Duration",
    "ProjectTimeSummary",
    "ReconcilableEntry",
    "TimeEntry",
    "TimeSummary",
    "charge",
    "entry_time",
    "is_rounded",
    "reconcile",
    "round_time",
]
