# armcosts/costs/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from armcosts.errors import CatalogFetchError
from armcosts.prices.catalog import CatalogResponse
from armcosts.whatif.resource_id import ResourceId


def _key(resource_id: ResourceId | str) -> str:
    # ARM ids are case-insensitive
    return str(resource_id).lower()


@dataclass
class RunContext:
    """
    Mutable state for one estimation run: the catalog response cache (failed
    requests included), the resource -> location map used for ancestor
    lookups, and the unsupported resources seen so far. Nothing here is ever
    evicted, so a context must not outlive a single batch.
    """
    responses: Dict[str, CatalogResponse] = field(default_factory=dict)
    # url -> CatalogFetchError, or None for a client-error answer
    failures: Dict[str, Optional[CatalogFetchError]] = field(default_factory=dict)
    locations: Dict[str, str] = field(default_factory=dict)
    unsupported: List[ResourceId] = field(default_factory=list)
    fetch_count: int = 0

    # ---- catalog cache ----
    def cached_response(self, url: str) -> Optional[CatalogResponse]:
        return self.responses.get(url)

    def store_response(self, url: str, response: CatalogResponse) -> None:
        self.responses[url] = response

    def has_failed(self, url: str) -> bool:
        return url in self.failures

    def failure(self, url: str) -> Optional[CatalogFetchError]:
        return self.failures.get(url)

    def record_failure(self, url: str, error: Optional[CatalogFetchError]) -> None:
        self.failures[url] = error

    # ---- locations ----
    def record_location(self, resource_id: ResourceId | str, location: str) -> None:
        self.locations[_key(resource_id)] = location

    def recorded_location(self, resource_id: ResourceId | str) -> Optional[str]:
        return self.locations.get(_key(resource_id))
