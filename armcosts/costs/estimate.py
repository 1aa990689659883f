# armcosts/costs/estimate.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from armcosts.config import CapacityTiers, load_capacity_tiers
from armcosts.costs.context import RunContext
from armcosts.costs.location import resolve_location
from armcosts.costs.summary import CostSummary
from armcosts.errors import (
    CatalogFetchError,
    LocationUnavailableError,
    MissingDesiredStateError,
    MissingFieldError,
    MissingResourceIdError,
    NoCatalogDataError,
    SkipResourceError,
    StrategyConstructionError,
)
from armcosts.output.report import NullReporter, Reporter
from armcosts.prices.query import RetailPricesClient
from armcosts.providers.azure.resource_registry import ResourceRegistry, get_resource_registry
from armcosts.schema.estimation import EstimatedResource, EstimationOutput
from armcosts.schema.registry_item import RegistryItem
from armcosts.whatif.change import Change
from armcosts.whatif.resource_id import ResourceId, parse_resource_id

# Skips caused by broken input or infrastructure rather than plain missing data.
_LOGGED_AS_ERROR = (
    CatalogFetchError,
    LocationUnavailableError,
    MissingFieldError,
    StrategyConstructionError,
)


def _build(factory: Callable, *args: Any) -> Any:
    try:
        return factory(*args)
    except Exception as e:
        name = getattr(factory, "__name__", repr(factory))
        raise StrategyConstructionError(f"Couldn't create an instance of {name}: {e}") from e


class Estimator:
    """
    Estimates a list of what-if changes one by one.

    Per change: parse the id, record its location, look up the registry,
    resolve the location (falling back to an ancestor), build the catalog
    query, fetch it through the run cache, and price the after/before states.
    """

    def __init__(
        self,
        client: RetailPricesClient,
        registry: Optional[ResourceRegistry] = None,
        capacity_tiers: Optional[CapacityTiers] = None,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.client = client
        self.registry = registry if registry is not None else get_resource_registry()
        self.capacity_tiers = capacity_tiers if capacity_tiers is not None else load_capacity_tiers()
        self.reporter = reporter or NullReporter(client.currency)

    @property
    def currency(self) -> str:
        return self.client.currency

    def run(self, changes: Sequence[Change], context: Optional[RunContext] = None) -> EstimationOutput:
        """
        Estimate every change and return the aggregated output. Per-resource
        problems are logged and skipped; BrokenAncestorChainError propagates.
        """
        context = context if context is not None else RunContext()
        summary = CostSummary(self.currency)

        self.reporter.start()
        for change in changes:
            try:
                resource = self.estimate_change(change, changes, context)
            except SkipResourceError as e:
                level = logging.ERROR if isinstance(e, _LOGGED_AS_ERROR) else logging.WARNING
                logging.log(level, "%s: %s", change.resource_id or "<no resource id>", e)
                continue

            if resource is not None:
                summary.add(change.change_type, resource)

        output = summary.build(context.unsupported)
        logging.debug(
            "Estimated %d resources with %d catalog requests (%d cached responses)",
            len(output.resources), context.fetch_count, len(context.responses),
        )
        self.reporter.summary(output)
        return output

    def estimate_change(
        self,
        change: Change,
        changes: Sequence[Change],
        context: RunContext,
    ) -> Optional[EstimatedResource]:
        """
        Returns None for unsupported types (recorded on the context), raises a
        SkipResourceError subclass when the resource can't be estimated.
        """
        if not change.resource_id:
            raise MissingResourceIdError("Ignoring resource with empty resource ID.")

        state = change.desired_state
        if state is None:
            raise MissingDesiredStateError("Ignoring resource with empty desired state.")

        rid = parse_resource_id(change.resource_id)
        if state.location:
            # children declared later without a location inherit this one
            context.record_location(rid, state.location)

        item = self.registry.lookup(rid.resource_type)
        if item.is_no_cost:
            self.reporter.free_resource(rid, change.change_type)
            return EstimatedResource(rid, Decimal(0), Decimal(0), state.location)
        if not item.is_priced:
            if rid.name is not None:
                logging.info("%s is not yet supported.", rid.resource_type)
                context.unsupported.append(rid)
            return None

        return self._estimate_priced(item, rid, change, changes, context)

    def _estimate_priced(
        self,
        item: RegistryItem,
        rid: ResourceId,
        change: Change,
        changes: Sequence[Change],
        context: RunContext,
    ) -> EstimatedResource:
        state = change.desired_state
        assert state is not None

        location = resolve_location(rid, state, context)

        query = _build(item.query, state, rid, self.client.base_query)
        url = query.build_query_url(location)
        if url is None:
            raise MissingFieldError(f"Can't build a Retail API query for {rid.name} ({rid.resource_type}).")

        data = self.client.fetch(url, context)
        if data is None:
            raise NoCatalogDataError(f"Data for {rid.resource_type} is not available.")
        if not data.items:
            raise NoCatalogDataError(f"Got no records for {rid.resource_type} from Retail API.")

        estimation = _build(item.calculation, data.items, rid, self.capacity_tiers)
        total_cost = estimation.total_cost(state, changes)

        delta: Optional[Decimal] = None
        if change.before is not None:
            after_cost = estimation.total_cost(change.after, changes) if change.after else Decimal(0)
            before_cost = estimation.total_cost(change.before, changes)
            delta = after_cost - before_cost

        shown_location = data.location or location
        self.reporter.resource(rid, change.change_type, shown_location, estimation.ordered_items(), total_cost, delta)
        return EstimatedResource(rid, total_cost, delta, shown_location)
