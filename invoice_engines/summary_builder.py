"""
Build an exact (unrounded) TimeSummary from raw time entries.

Entries are grouped by project, then by activity within the project, and
their durations summed exactly. Each parent's time is the exact sum of its
children, which is the precondition ``rounded`` relies on. Projects and
activities appear in the order they are first seen.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from invoice_kernel.domain.time_summary import Detail, ProjectTimeSummary, TimeSummary
from invoice_kernel.domain.values import Duration
from invoice_kernel.logging_config import get_logger

logger = get_logger("engines.summary_builder")


@dataclass(frozen=True, slots=True)
class RawTimeEntry:
    """One recorded block of time, as captured by the tracker."""

    project: str
    activity: str
    time: Duration

    def __post_init__(self) -> None:
        if not self.project:
            raise ValueError("Time entry must name a project")
        if not isinstance(self.time, Duration):
            raise TypeError(f"time must be Duration, got {type(self.time)}")


def build_time_summary(entries: Iterable[RawTimeEntry]) -> TimeSummary:
    """Aggregate raw entries into an exact, unrounded TimeSummary."""
    # dicts keep insertion order, which gives first-seen ordering
    projects: dict[str, dict[str, Duration]] = {}
    entry_count = 0
    for entry in entries:
        activities = projects.setdefault(entry.project, {})
        activities[entry.activity] = (
            activities.get(entry.activity, Duration.zero()) + entry.time
        )
        entry_count += 1

    project_summaries = []
    for name, activities in projects.items():
        details = tuple(
            Detail(activity=activity, time=time)
            for activity, time in activities.items()
        )
        project_summaries.append(
            ProjectTimeSummary(
                name=name,
                time=sum((d.time for d in details), Duration.zero()),
                details=details,
            )
        )

    summary = TimeSummary(
        total=sum((p.time for p in project_summaries), Duration.zero()),
        projects=tuple(project_summaries),
    )
    logger.debug("time_summary_built", extra={
        "entry_count": entry_count,
        "project_count": len(project_summaries),
    })
    return summary
