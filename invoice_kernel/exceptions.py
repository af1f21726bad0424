"""
Typed Exception Hierarchy for the Invoice Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers that render invoices need to tell a data-construction bug apart from
a bad billing rate without parsing message strings. Every error therefore:
  1. Has its own class (catch by type, not message)
  2. Carries a CODE class attribute (machine-readable)
  3. Stores its context as attributes (survives logging and serialization)

Example:
    try:
        summary = rounded(raw_summary)
    except ReconciliationInconsistencyError as e:
        log.error("bad summary", extra={"reason": e.reason, "delta": e.delta_units})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InvoiceTrackerError (base)
    |
    +-- DurationError
    |   +-- NegativeDurationError
    |
    +-- RateError
    |   +-- InvalidRateError
    |
    +-- ReconciliationError
        +-- ReconciliationInconsistencyError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                          | When Raised
----------------|-------------------------------|-------------------------------
Duration        | NEGATIVE_DURATION             | Duration built below zero
----------------|-------------------------------|-------------------------------
Rate            | INVALID_RATE                  | Rate not a finite number
----------------|-------------------------------|-------------------------------
Reconciliation  | RECONCILIATION_INCONSISTENCY  | Children cannot be made to sum
                |                               | to the rounded parent total

Reconciliation failures are never retried. The transformation is pure and
deterministic, so the same input always fails the same way; the fix belongs
wherever the unrounded summary was built.
"""


class InvoiceTrackerError(Exception):
    """
    Base exception for all invoice kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVOICE_TRACKER_ERROR"


# Duration-related exceptions


class DurationError(InvoiceTrackerError):
    """Base exception for duration errors."""

    code: str = "DURATION_ERROR"


class NegativeDurationError(DurationError):
    """A duration was constructed (or computed) below zero."""

    code: str = "NEGATIVE_DURATION"

    def __init__(self, seconds: str):
        self.seconds = seconds
        super().__init__(f"Duration cannot be negative: {seconds} seconds")


# Rate-related exceptions


class RateError(InvoiceTrackerError):
    """Base exception for billing rate errors."""

    code: str = "RATE_ERROR"


class InvalidRateError(RateError):
    """Billing rate is not a finite, non-negative decimal number."""

    code: str = "INVALID_RATE"

    def __init__(self, rate: str):
        self.rate = rate
        super().__init__(f"Invalid billing rate: {rate}")


# Reconciliation exceptions


class ReconciliationError(InvoiceTrackerError):
    """Base exception for reconciliation errors."""

    code: str = "RECONCILIATION_ERROR"


class ReconciliationInconsistencyError(ReconciliationError):
    """
    Rounded children cannot be made to sum to the rounded parent total.

    Raised when the parent total is off the tenth-hour grid, when there are no
    children to carry a nonzero total, when the rounding deficit is larger
    than the children can absorb one unit each, or when a supposedly
    reconciled tree fails verification.

    Reasons:
        unrounded_total, no_children, delta_exceeds_children,
        invariant_violated
    """

    code: str = "RECONCILIATION_INCONSISTENCY"

    def __init__(
        self,
        reason: str,
        target_hours: str,
        child_count: int,
        delta_units: int = 0,
        detail: str = "",
    ):
        self.reason = reason
        self.target_hours = target_hours
        self.child_count = child_count
        self.delta_units = delta_units
        self.detail = detail
        message = (
            f"Cannot reconcile {child_count} entries to {target_hours} hours "
            f"({reason}, delta={delta_units} tenth-hour units)"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
