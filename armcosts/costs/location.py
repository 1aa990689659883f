# armcosts/costs/location.py
from __future__ import annotations

import logging
from typing import Optional

from armcosts.costs.context import RunContext
from armcosts.errors import BrokenAncestorChainError, LocationUnavailableError
from armcosts.whatif.change import DesiredState
from armcosts.whatif.resource_id import ResourceId


def find_ancestor_location(resource_id: ResourceId, context: RunContext) -> Optional[str]:
    """
    Walk up from the parent of ``resource_id`` and return the location recorded
    for the nearest ancestor. Returns None once a root scope is reached without
    a match; raises BrokenAncestorChainError if the chain ends before any root.
    """
    current = resource_id.parent
    while current is not None:
        location = context.recorded_location(current)
        if location:
            logging.debug("Using location %s of %s for %s", location, current, resource_id)
            return location
        if current.is_root:
            return None
        current = current.parent

    raise BrokenAncestorChainError(f"Couldn't find resource parent for {resource_id}.")


def resolve_location(resource_id: ResourceId, state: DesiredState, context: RunContext) -> str:
    if state.location:
        return state.location

    location = find_ancestor_location(resource_id, context)
    if location is None:
        raise LocationUnavailableError(f"Resources without location are not supported ({resource_id}).")
    return location
