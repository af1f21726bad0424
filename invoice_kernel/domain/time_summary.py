"""
Time summary tree for an invoice period.

    TimeSummary            total, projects
    +-- ProjectTimeSummary name, time, details
        +-- Detail         activity, time

Nodes are frozen; rounding and reconciliation always build a complete new
tree. Before rounding, every node holds exact aggregates. After
``TimeSummary.rounded()`` every time is a whole number of tenth-hour units,
projects add up to the total and each project's details add up to the
project.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field

from invoice_kernel.domain.rounding import reconcile, round_time
from invoice_kernel.domain.values import Duration


@dataclass(frozen=True, slots=True)
class Detail:
    """A single project activity and the time spent on it."""

    activity: str = ""
    time: Duration = field(default_factory=Duration.zero)

    def with_time(self, time: Duration) -> Detail:
        return dataclasses.replace(self, time=time)

    @staticmethod
    def reconciled(details: Sequence[Detail], total: Duration) -> tuple[Detail, ...]:
        """
        Round detail entries so that they add up to a rounded total.

        Times are rounded to the nearest tenth of an hour and then adjusted
        so that the rounded values sum to ``total``.
        """
        return tuple(reconcile(details, total))


@dataclass(frozen=True, slots=True)
class ProjectTimeSummary:
    """Time spent on one project during an invoice period."""

    name: str = ""
    time: Duration = field(default_factory=Duration.zero)
    details: tuple[Detail, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", tuple(self.details))

    def with_time(self, time: Duration) -> ProjectTimeSummary:
        return dataclasses.replace(self, time=time)

    @staticmethod
    def reconciled(
        projects: Sequence[ProjectTimeSummary], total: Duration
    ) -> tuple[ProjectTimeSummary, ...]:
        """
        Round projects so that they add up to a rounded total.

        Once the projects themselves are reconciled, each project's details
        are reconciled against that project's new time in the same way.
        """
        return tuple(
            project._with_reconciled_details()
            for project in reconcile(projects, total)
        )

    def _with_reconciled_details(self) -> ProjectTimeSummary:
        return dataclasses.replace(
            self, details=Detail.reconciled(self.details, self.time)
        )


@dataclass(frozen=True, slots=True)
class TimeSummary:
    """Summary of all time entries for an invoice period."""

    total: Duration = field(default_factory=Duration.zero)
    projects: tuple[ProjectTimeSummary, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "projects", tuple(self.projects))

    @property
    def time(self) -> Duration:
        """The grand total, so a TimeSummary is a TimeEntry too."""
        return self.total

    def rounded(self) -> TimeSummary:
        """
        Round every time in the summary to the nearest tenth of an hour.

        The total is rounded first; projects are then reconciled against it
        and details against their project, so that rounded values always
        add up. A summary should be rounded before it is reported on or
        invoiced.
        """
        total = round_time(self.total)
        return TimeSummary(
            total=total,
            projects=ProjectTimeSummary.reconciled(self.projects, total),
        )
