"""
Invoice Period Loader (``invoice_config.loader``).

Responsibility
--------------
Loads an invoice period YAML file and parses it into the frozen
``invoice_config.schema`` dataclasses.

Architecture position
---------------------
**Config layer** -- input tooling. Depends on ``invoice_kernel`` value
types only; the kernel and engines never import this package.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* Recorded times are converted straight to exact ``Duration`` values; a
  YAML float such as ``1.1`` becomes exactly 1.1 hours.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  period, identifying the input behind a rendered report.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Invalid rate, time, date or invoice number  -> ``ValueError``.
* Entries that are not a list of mappings  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from invoice_config.schema import InvoicePeriod, TimeEntryDef
from invoice_kernel.domain.values import Duration
from invoice_kernel.exceptions import DurationError
from invoice_kernel.logging_config import get_logger

logger = get_logger("config.loader")

_TIME_UNITS = {
    "hours": Duration.of_hours,
    "minutes": Duration.of_minutes,
    "seconds": Duration.of_seconds,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level of the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_rate(value: Any) -> Decimal:
    """Parse a billing rate; must be a finite, non-negative number."""
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid rate: {value!r}") from e
    if not rate.is_finite() or rate < 0:
        raise ValueError(f"Invalid rate: {value!r}")
    return rate


def parse_time(data: dict[str, Any]) -> Duration:
    """
    Parse the recorded time of an entry.

    Exactly one of ``hours``, ``minutes`` or ``seconds`` must be present.
    """
    present = [unit for unit in _TIME_UNITS if unit in data]
    if len(present) != 1:
        raise ValueError(
            f"Time entry needs exactly one of {sorted(_TIME_UNITS)}, got {present}"
        )
    unit = present[0]
    try:
        return _TIME_UNITS[unit](data[unit])
    except DurationError as e:
        raise ValueError(f"Invalid {unit} value {data[unit]!r}: {e}") from e


def parse_entry(data: dict[str, Any]) -> TimeEntryDef:
    """Parse a ``TimeEntryDef`` from a dict."""
    if not isinstance(data, dict):
        raise ValueError(f"Time entry must be a mapping, got {data!r}")
    project = str(data["project"]).strip()
    if not project:
        raise ValueError("Time entry has an empty project name")
    return TimeEntryDef(
        project=project,
        activity=str(data.get("activity", "")).strip(),
        time=parse_time(data),
    )


def parse_invoice_number(value: Any) -> int | None:
    """Parse the optional invoice number; must be an integer scalar."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Invalid invoice number: {value!r}")
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid invoice number: {value!r}") from e


def parse_invoice_period(data: dict[str, Any]) -> InvoicePeriod:
    """Parse an ``InvoicePeriod`` from a dict."""
    entries = data.get("entries") or []
    if not isinstance(entries, list):
        raise ValueError(f"'entries' must be a list, got {type(entries).__name__}")
    return InvoicePeriod(
        rate=parse_rate(data["rate"]),
        entries=tuple(parse_entry(e) for e in entries),
        invoice_number=parse_invoice_number(data.get("invoice_number")),
        period_start=parse_date(data["period_start"]) if data.get("period_start") else None,
        period_end=parse_date(data["period_end"]) if data.get("period_end") else None,
    )


def load_invoice_period(path: Path) -> InvoicePeriod:
    """Load and parse an invoice period file."""
    period = parse_invoice_period(load_yaml_file(Path(path)))
    logger.info("invoice_period_loaded", extra={
        "path": str(path),
        "invoice_number": period.invoice_number,
        "entry_count": len(period.entries),
        "checksum": compute_checksum(period),
    })
    return period


def compute_checksum(period: InvoicePeriod) -> str:
    """
    Compute SHA-256 checksum of the period's canonical JSON serialization.

    Identical periods always produce identical checksums. Times are
    serialized as exact second counts so the checksum does not depend on
    which unit the file used.
    """
    data = {
        "rate": f"{period.rate.normalize():f}",
        "invoice_number": period.invoice_number,
        "period_start": period.period_start,
        "period_end": period.period_end,
        "entries": [
            [e.project, e.activity, f"{e.time.seconds.normalize():f}"]
            for e in period.entries
        ],
    }
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
