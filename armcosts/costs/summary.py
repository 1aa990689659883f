# armcosts/costs/summary.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from armcosts.schema.estimation import EstimatedResource, EstimationOutput
from armcosts.whatif.change import ChangeType
from armcosts.whatif.resource_id import ResourceId


class CostSummary:
    """
    Running totals for one batch.

      total: every estimated resource except deletes
      delta: +cost for creates, -cost for deletes, untouched otherwise
    """

    def __init__(self, currency: str) -> None:
        self.currency = currency
        self.total_cost = Decimal(0)
        self.delta = Decimal(0)
        self.resources: List[EstimatedResource] = []

    def add(self, change_type: ChangeType, resource: EstimatedResource) -> None:
        if change_type is not ChangeType.DELETE:
            self.total_cost += resource.total_cost

        if change_type is ChangeType.CREATE:
            self.delta += resource.total_cost
        elif change_type is ChangeType.DELETE:
            self.delta -= resource.total_cost

        self.resources.append(resource)

    def build(self, unsupported: Iterable[ResourceId] = ()) -> EstimationOutput:
        return EstimationOutput(
            total_cost=self.total_cost,
            delta=self.delta,
            resources=tuple(self.resources),
            currency=self.currency,
            unsupported=tuple(unsupported),
        )
