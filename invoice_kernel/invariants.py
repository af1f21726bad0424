"""
Kernel Invariants Contract.

These invariants hold for every summary that leaves
``TimeSummary.rounded()``. No configuration can switch them off.

This module only declares them. Enforcement lives in
invoice_kernel.domain.rounding and is re-checked after every rounding by
invoice_engines.reconciliation.verify_reconciled.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    TENTH_HOUR_GRID = "tenth_hour_grid"
    """Every rounded time is a whole number of tenth-hour units."""

    TOTAL_MATCHES_PROJECTS = "total_matches_projects"
    """The rounded total equals the sum of the rounded project times."""

    PROJECT_MATCHES_DETAILS = "project_matches_details"
    """Each rounded project time equals the sum of its rounded details."""

    ORDER_PRESERVED = "order_preserved"
    """Reconciliation never reorders, drops or adds entries."""

    IMMUTABILITY = "immutability"
    """Rounding builds a new tree; the input tree is never modified."""


ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "invoice_engines",
    "invoice_config",
    "scripts",
)
