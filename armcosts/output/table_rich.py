# armcosts/output/table_rich.py
from __future__ import annotations

import shutil
from typing import Optional

from rich.console import Console
from rich.table import Table

from armcosts.output.report import format_amount, format_delta
from armcosts.schema.estimation import EstimatedResource, EstimationOutput


def _resource_delta(resource: EstimatedResource) -> str:
    # no before-state, nothing to compare against
    if resource.delta is None:
        return "-"
    return format_delta(resource.delta)


def render_table(output: EstimationOutput, *, no_color: bool = False, width: Optional[int] = None) -> str:
    """
    Return a string containing a Rich-rendered table: one row per estimated
    resource in input order, then a TOTAL row carrying the batch total and delta.
    """
    table = Table(
        show_header=True,
        header_style=None if no_color else "bold",
        box=None,
        pad_edge=False,
    )
    table.add_column("NAME", justify="left", no_wrap=True)
    table.add_column("TYPE", justify="left")
    table.add_column("LOCATION", justify="left")
    table.add_column(f"MONTHLY COST ({output.currency})", justify="right")
    table.add_column("DELTA", justify="right")

    for r in output.resources:
        table.add_row(
            r.name or "<resource>",
            r.resource_type,
            r.location or "",
            format_amount(r.total_cost),
            _resource_delta(r),
        )

    table.add_row("", "", "", "", "")
    table.add_row("TOTAL", "", "", format_amount(output.total_cost), format_delta(output.delta))

    if width is None:
        width = shutil.get_terminal_size((100, 20)).columns
    console = Console(no_color=no_color, force_terminal=True, width=width)
    with console.capture() as cap:
        console.print(table)
    return cap.get()
