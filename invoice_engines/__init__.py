"""
Module: invoice_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the engine
    sub-modules. This is the canonical import surface for callers such as
    the report script.

Architecture position:
    Engines -- calculation and formatting layer, zero I/O.
    May import invoice_kernel. MUST NOT import invoice_config or scripts.

Invariants enforced:
    - Purity: no clock reads, no file or network access.
    - Decimal-only arithmetic for hours and amounts.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    ``rounded`` is traced via ``@traced_engine`` (see
    ``invoice_engines.tracer``), emitting INVOICE_ENGINE_TRACE log records
    with an input fingerprint, so a rendered report can be tied back to the
    summary it was produced from.

Usage:
    from invoice_engines import build_time_summary, rounded, format_summary
"""

from invoice_engines.reconciliation import rounded, verify_reconciled
from invoice_engines.reporting import (
    format_amount,
    format_details,
    format_hours,
    format_summary,
)
from invoice_engines.summary_builder import RawTimeEntry, build_time_summary
from invoice_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "RawTimeEntry",
    "build_time_summary",
    "compute_input_fingerprint",
    "format_amount",
    "format_details",
    "format_hours",
    "format_summary",
    "rounded",
    "traced_engine",
    "verify_reconciled",
]
