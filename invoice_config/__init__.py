"""
invoice_config -- loading of invoice period files.

Responsibility:
    Turns a YAML invoice period (billing rate, optional invoice number and
    period dates, raw time entries) into frozen dataclasses.

Architecture position:
    Configuration -- sits above ``invoice_kernel``. The kernel MUST NEVER
    import from ``invoice_config``.

Failure modes:
    - ``FileNotFoundError`` -- the period file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``KeyError`` / ``ValueError`` -- missing or invalid fields.
"""

from invoice_config.loader import compute_checksum, load_invoice_period
from invoice_config.schema import InvoicePeriod, TimeEntryDef

__all__ = [
    "InvoicePeriod",
    "TimeEntryDef",
    "compute_checksum",
    "load_invoice_period",
]
