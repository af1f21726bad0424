"""
Reports on the time entries that make up an invoice.

Both reports expect a summary that has already been through
``invoice_engines.reconciliation.rounded``; they format values, they do not
round them to the billing grid.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from invoice_kernel.domain.rounding import charge
from invoice_kernel.domain.time_summary import Detail, ProjectTimeSummary, TimeSummary
from invoice_kernel.domain.values import Duration

_ONE_PLACE = Decimal("0.1")
_TWO_PLACES = Decimal("0.01")

_HEADER = ("Hours", "Project", "Rate", "Amount")
_RIGHT_ALIGNED = frozenset({0, 2, 3})


def format_hours(duration: Duration) -> str:
    hours = duration.hours.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)
    return f"{hours:,.1f}"


def format_amount(duration: Duration, rate: Decimal | int | str) -> str:
    amount = charge(duration, rate).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return f"{amount:,.2f}"


def format_summary(summary: TimeSummary, rate: Decimal | int | str) -> str:
    """
    Tabular summary of an invoice.

    One row per project with hours, billing rate and charge, followed by a
    separator and a grand TOTAL row. Suitable for the line items of an
    invoice.
    """
    rows = [_project_row(project, rate) for project in summary.projects]
    total = [format_hours(summary.total), "TOTAL", "", format_amount(summary.total, rate)]

    widths = [
        max(len(row[col]) for row in [list(_HEADER), *rows, total])
        for col in range(len(_HEADER))
    ]
    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    lines = [
        separator,
        _render_row(_HEADER, widths, header=True),
        separator,
        *(_render_row(row, widths) for row in rows),
        separator,
        _render_row(total, widths),
        separator,
    ]
    return "\n".join(lines) + "\n"


def format_details(summary: TimeSummary) -> str:
    """
    Markdown summary of the work done during an invoice period.

    Entries are grouped by project; each line shows the activity and its
    time. A starting point for an e-mail describing the invoiced work.
    """
    sections = "\n\n".join(_project_section(p) for p in summary.projects)
    return f"## Included\n\n{sections}\n"


def _project_row(project: ProjectTimeSummary, rate: Decimal | int | str) -> list[str]:
    return [
        format_hours(project.time),
        project.name,
        str(rate),
        format_amount(project.time, rate),
    ]


def _render_row(cells, widths: list[int], header: bool = False) -> str:
    rendered = []
    for col, (cell, width) in enumerate(zip(cells, widths)):
        if header:
            rendered.append(cell.center(width))
        elif col in _RIGHT_ALIGNED:
            rendered.append(cell.rjust(width))
        else:
            rendered.append(cell.ljust(width))
    return "| " + " | ".join(rendered) + " |"


def _project_section(project: ProjectTimeSummary) -> str:
    lines = "\n\n".join(_detail_line(d) for d in project.details)
    return f"### {project.name}\n\n{lines}".rstrip()


def _detail_line(detail: Detail) -> str:
    return f"- {detail.activity} ({format_hours(detail.time)} hrs)"
