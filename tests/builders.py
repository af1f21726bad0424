"""Builders for exact (unrounded) time summaries used across the test suite."""

from invoice_kernel.domain.time_summary import Detail, ProjectTimeSummary, TimeSummary
from invoice_kernel.domain.values import Duration


def hours(value: str) -> Duration:
    """Shorthand for an exact Duration in hours."""
    return Duration.of_hours(value)


def project(name: str, *details: tuple[str, str]) -> ProjectTimeSummary:
    """Build an exact project whose time is the sum of its details."""
    built = tuple(Detail(activity=a, time=hours(h)) for a, h in details)
    return ProjectTimeSummary(
        name=name,
        time=sum((d.time for d in built), Duration.zero()),
        details=built,
    )


def summary_of(*projects: ProjectTimeSummary) -> TimeSummary:
    """Build an exact summary whose total is the sum of its projects."""
    return TimeSummary(
        total=sum((p.time for p in projects), Duration.zero()),
        projects=projects,
    )
