# armcosts/output/report.py
from __future__ import annotations

from decimal import Decimal
from typing import Callable, Iterable, Optional

import click

from armcosts.prices.catalog import CatalogItem
from armcosts.schema.estimation import EstimationOutput
from armcosts.whatif.change import ChangeType
from armcosts.whatif.resource_id import ResourceId

SEPARATOR = "-------------------------------"

_CHANGE_MARKERS = {
    ChangeType.CREATE: ("+", "green"),
    ChangeType.DELETE: ("-", "red"),
    ChangeType.UPDATE: ("~", "yellow"),
    ChangeType.NO_CHANGE: ("=", None),
}


def format_amount(value: Decimal) -> str:
    """Two decimals with a thousands separator, e.g. 1,234.50."""
    return f"{value:,.2f}"


def format_delta(value: Decimal) -> str:
    # Non-negative deltas get an explicit "+"; negative ones keep only their own "-".
    sign = "+" if value >= 0 else ""
    return f"{sign}{format_amount(value)}"


def displayed_delta(change_type: ChangeType, total_cost: Decimal, delta: Optional[Decimal]) -> Decimal:
    """Delta shown for one resource: the computed one, or the implied one for creates/deletes."""
    if delta is not None:
        return delta
    if change_type is ChangeType.CREATE:
        return total_cost
    if change_type is ChangeType.DELETE:
        return -total_cost
    return Decimal(0)


class Reporter:
    """
    Line-oriented estimation report. Lines go to ``write`` (click.echo by
    default) so the CLI can route the report to stdout or stderr.
    """

    def __init__(
        self,
        currency: str,
        detailed: bool = True,
        no_color: bool = False,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.currency = currency
        self.detailed = detailed
        self.no_color = no_color
        self._write = write or click.echo

    def line(self, text: str = "") -> None:
        self._write(text)

    def _section_end(self) -> None:
        self.line()
        self.line(SEPARATOR)
        self.line()

    def _header(self, change_type: ChangeType, name: Optional[str]) -> None:
        marker, color = _CHANGE_MARKERS[change_type]
        text = f"{marker} {name}"
        if color and not self.no_color:
            text = click.style(text, fg=color)
        self.line(text)

    def _sub(self, text: str) -> None:
        self.line(f"   {text}")

    # ---- per resource ----
    def start(self) -> None:
        self.line("Estimations:")
        self.line()

    def resource(
        self,
        resource_id: ResourceId,
        change_type: ChangeType,
        location: Optional[str],
        items: Iterable[CatalogItem],
        total_cost: Decimal,
        delta: Optional[Decimal],
    ) -> None:
        shown = displayed_delta(change_type, total_cost, delta)
        self._header(change_type, resource_id.name)
        self._sub(f"Type: {resource_id.resource_type}")
        self._sub(f"Location: {location or ''}")
        self._sub(f"Total cost: {format_amount(total_cost)} {self.currency}")
        self._sub(f"Delta: {format_delta(shown)} {self.currency}")

        if self.detailed:
            self._detailed_metrics(list(items))

        self._section_end()

    def _detailed_metrics(self, items: list) -> None:
        self.line()
        self.line("Aggregated metrics:")
        self.line()
        if not items:
            self.line("No metrics available.")
            return
        for item in items:
            self.line(
                f"-> {item.sku_name} | {item.product_name} | {item.meter_name} | "
                f"{item.retail_price} for {item.unit_of_measure}"
            )

    def free_resource(self, resource_id: ResourceId, change_type: ChangeType) -> None:
        self._header(change_type, resource_id.name)
        self._sub(f"Type: {resource_id.resource_type}")
        self._sub("Total cost: Free")
        self._section_end()

    # ---- end of run ----
    def summary(self, output: EstimationOutput) -> None:
        if not output.resources:
            self.line("No resource available for estimation.")
            self._section_end()

        if output.unsupported:
            self.line("Unsupported resources:")
            self.line()
            for rid in output.unsupported:
                self.line(f"{rid.name} [{rid.resource_type}]")
            self._section_end()

        self.line("Summary:")
        self.line()
        self.line(f"Total cost: {format_amount(output.total_cost)} {output.currency}")
        self.line(f"Delta: {format_delta(output.delta)} {output.currency}")
        self.line()


class NullReporter(Reporter):
    """Reporter that discards every line."""

    def __init__(self, currency: str = "USD") -> None:
        super().__init__(currency, detailed=False, no_color=True, write=lambda _text: None)
