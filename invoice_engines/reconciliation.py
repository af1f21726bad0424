"""
Module: invoice_engines.reconciliation
Responsibility:
    Single entry point that turns an exact TimeSummary into a fully rounded,
    reconciled one, and a verifier for the rounded tree's sum invariants.

Architecture position:
    Engines -- calculation layer on top of invoice_kernel, zero I/O.
    Reporting and invoice line generation must go through ``rounded`` first.

Invariants enforced:
    - Every time in the result is a whole number of tenth-hour units.
    - Rounded project times add up to the rounded total.
    - Rounded detail times add up to their project's rounded time.

Failure modes:
    - ReconciliationInconsistencyError when the input cannot be reconciled
      (see invoice_kernel.domain.rounding.reconcile) or when the result
      fails verification. Either way it points at whoever built the
      unrounded summary; nothing here retries.

Usage:
    from invoice_engines.reconciliation import rounded

    report_summary = rounded(build_time_summary(entries))
"""

from __future__ import annotations

from invoice_engines.tracer import traced_engine
from invoice_kernel.domain.rounding import is_rounded
from invoice_kernel.domain.time_summary import TimeSummary
from invoice_kernel.domain.values import Duration
from invoice_kernel.exceptions import ReconciliationInconsistencyError
from invoice_kernel.logging_config import get_logger

logger = get_logger("engines.reconciliation")


def _hours(duration: Duration) -> str:
    return f"{duration.hours.normalize():f}"


@traced_engine("reconciliation", "1.0", fingerprint_fields=("summary",))
def rounded(summary: TimeSummary) -> TimeSummary:
    """
    Round a time summary to tenths of an hour at every level.

    Rounds the grand total, reconciles projects against it, then reconciles
    each project's details against the project's rounded time. Returns a new
    tree; ``summary`` is left untouched.
    """
    detail_count = sum(len(project.details) for project in summary.projects)
    logger.info("reconciliation_started", extra={
        "project_count": len(summary.projects),
        "detail_count": detail_count,
        "exact_total_hours": _hours(summary.total),
    })

    try:
        result = summary.rounded()
        verify_reconciled(result)
    except ReconciliationInconsistencyError as e:
        logger.error("reconciliation_failed", extra={
            "reason": e.reason,
            "delta_units": e.delta_units,
            "target_hours": e.target_hours,
        })
        raise

    logger.info("reconciliation_completed", extra={
        "project_count": len(result.projects),
        "detail_count": detail_count,
        "exact_total_hours": _hours(summary.total),
        "rounded_total_hours": _hours(result.total),
    })
    return result


def verify_reconciled(summary: TimeSummary) -> None:
    """
    Check that a summary satisfies the rounded-tree invariants.

    Raises:
        ReconciliationInconsistencyError: with reason ``invariant_violated``
            and a ``detail`` naming the first node that breaks a rule.
    """

    def fail(detail: str, child_count: int) -> ReconciliationInconsistencyError:
        return ReconciliationInconsistencyError(
            reason="invariant_violated",
            target_hours=_hours(summary.total),
            child_count=child_count,
            detail=detail,
        )

    if not is_rounded(summary.total):
        raise fail("total is not a multiple of a tenth hour", len(summary.projects))

    project_sum = sum((p.time for p in summary.projects), Duration.zero())
    if project_sum != summary.total:
        raise fail(
            f"projects sum to {_hours(project_sum)} hours",
            len(summary.projects),
        )

    for project in summary.projects:
        if not is_rounded(project.time):
            raise fail(
                f"project {project.name!r} is not a multiple of a tenth hour",
                len(project.details),
            )
        bad = [d.activity for d in project.details if not is_rounded(d.time)]
        if bad:
            raise fail(
                f"details {bad!r} of project {project.name!r} are not "
                f"multiples of a tenth hour",
                len(project.details),
            )
        detail_sum = sum((d.time for d in project.details), Duration.zero())
        if detail_sum != project.time:
            raise fail(
                f"details of project {project.name!r} sum to "
                f"{_hours(detail_sum)} hours, expected {_hours(project.time)}",
                len(project.details),
            )
