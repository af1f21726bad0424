"""
Invoice Kernel

Pure core of the invoice time tracker:
- Exact Duration values
- Time summary tree (total, projects, activity details)
- Tenth-hour rounding with largest-remainder reconciliation
- Typed exceptions and structured logging
"""

__version__ = "0.1.0"
