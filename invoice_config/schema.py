"""
Invoice period schema.

The human-authored YAML description of one billing period is parsed by the
loader into these types. They are plain frozen data; no rounding or
aggregation happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from invoice_kernel.domain.values import Duration


@dataclass(frozen=True)
class TimeEntryDef:
    """One recorded time entry as written in the period file."""

    project: str
    activity: str
    time: Duration


@dataclass(frozen=True)
class InvoicePeriod:
    """Billing rate, optional period labels and the raw time entries."""

    rate: Decimal
    entries: tuple[TimeEntryDef, ...] = ()
    invoice_number: int | None = None
    period_start: date | None = None  # label only
    period_end: date | None = None

    @property
    def projects(self) -> tuple[str, ...]:
        """Project names in first-seen order."""
        return tuple(dict.fromkeys(entry.project for entry in self.entries))
