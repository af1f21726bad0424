"""
Pytest fixtures for the invoice kernel test suite.

Provides:
- Structured logging setup and log capture
- The reference invoice summary (builders live in tests/builders.py)
"""

import json
import logging
from io import StringIO

import pytest

from invoice_kernel.domain.time_summary import TimeSummary
from invoice_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from tests.builders import project, summary_of


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture invoice_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            rounded(summary)
            logs = captured_logs()
            assert any(r["message"] == "reconciliation_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("invoice_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Time summary fixtures
# =============================================================================


@pytest.fixture
def invoice_summary() -> TimeSummary:
    """
    Unrounded summary with project times 2.33h, 1.38h and 0.94h.

    Naive rounding gives 2.3 + 1.4 + 0.9 = 4.6 against a rounded total of
    4.7, so one tenth must go to Gamma (largest loss, 0.04h).
    """
    return summary_of(
        project("Alpha Works", ("Design", "1.2"), ("Build", "1.13")),
        project("Beta", ("Review", "1.38")),
        project("Gamma", ("Support", "0.5"), ("Meetings", "0.44")),
    )
