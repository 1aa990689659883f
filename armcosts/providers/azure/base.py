# armcosts/providers/azure/base.py
from __future__ import annotations

from decimal import Decimal
from typing import FrozenSet, List, Optional, Sequence

from armcosts.config import CapacityTiers
from armcosts.prices.catalog import CatalogItem
from armcosts.whatif.change import Change, DesiredState
from armcosts.whatif.resource_id import ResourceId

HOURS_IN_MONTH = Decimal(730)


# ---------------------------------------
# Query side: desired state -> filter clause
# ---------------------------------------

class BaseRetailQuery:
    """
    Builds the resource-specific part of a Retail Prices API filter.

    ``build_filter`` returns None when a field the query needs (usually the
    SKU) is missing from the desired state, and raises UnknownSkuError when
    the SKU is present but has no catalog mapping.
    """

    def __init__(self, state: DesiredState, resource_id: ResourceId, base_query: str) -> None:
        self.state = state
        self.resource_id = resource_id
        self.base_query = base_query

    def build_filter(self, location: str) -> Optional[str]:
        raise NotImplementedError

    def build_query_url(self, location: str) -> Optional[str]:
        clause = self.build_filter(location)
        if clause is None:
            return None
        return f"{self.base_query}{clause}"


# ---------------------------------------
# Calculation side: catalog items -> monthly cost
# ---------------------------------------

class BaseEstimation:
    """
    Turns the catalog items of one query into a monthly cost. The same
    instance prices both the after- and the before-state of a change.
    """

    def __init__(
        self,
        items: Sequence[CatalogItem],
        resource_id: ResourceId,
        capacity_tiers: Optional[CapacityTiers] = None,
    ) -> None:
        self.items = list(items)
        self.resource_id = resource_id
        self.capacity_tiers = capacity_tiers

    def ordered_items(self) -> List[CatalogItem]:
        # sorted() is stable, so equal prices keep catalog order
        return sorted(self.items, key=lambda i: i.retail_price, reverse=True)

    def item_matches(self, item: CatalogItem, state: DesiredState) -> bool:
        return True

    def item_cost(self, item: CatalogItem, state: DesiredState) -> Decimal:
        return item.retail_price * HOURS_IN_MONTH

    def total_cost(self, state: DesiredState, changes: Sequence[Change] = ()) -> Decimal:
        total = Decimal(0)
        for item in self.ordered_items():
            if self.item_matches(item, state):
                total += self.item_cost(item, state)
        return total


class RetailEstimation(BaseEstimation):
    """Every matched meter billed for a full month."""


class CapacityTierEstimation(BaseEstimation):
    """
    Only meters named in the capacity-tier allowlist for this resource type
    count, each multiplied by ``sku.capacity`` (default 1). Everything else
    contributes nothing.
    """

    def tier_meters(self) -> FrozenSet[str]:
        if self.capacity_tiers is None:
            return frozenset()
        return self.capacity_tiers.meters_for(self.resource_id.resource_type)

    def item_matches(self, item: CatalogItem, state: DesiredState) -> bool:
        return item.meter_name in self.tier_meters()

    def item_cost(self, item: CatalogItem, state: DesiredState) -> Decimal:
        capacity = 1
        if state.sku is not None and state.sku.capacity is not None:
            capacity = state.sku.capacity
        if capacity < 1:
            return Decimal(0)
        return item.retail_price * HOURS_IN_MONTH * capacity
