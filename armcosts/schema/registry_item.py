# armcosts/schema/registry_item.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class EntryKind(Enum):
    PRICED = "priced"
    NO_COST = "no_cost"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RegistryItem:
    """
    Registry entry for an ARM resource type.

    Attributes:
        name: Resource type, e.g. "Microsoft.Network/publicIPPrefixes".
        kind: Whether the type is priced, free, or unknown to the estimator.
        query: Factory (state, resource_id, base_query) -> BaseRetailQuery.
        calculation: Factory (items, resource_id, capacity_tiers) -> BaseEstimation.
    """
    name: str
    kind: EntryKind
    query: Optional[Callable] = None
    calculation: Optional[Callable] = None

    @classmethod
    def priced(cls, name: str, query: Callable, calculation: Callable) -> "RegistryItem":
        return cls(name=name, kind=EntryKind.PRICED, query=query, calculation=calculation)

    @classmethod
    def no_cost(cls, name: str) -> "RegistryItem":
        return cls(name=name, kind=EntryKind.NO_COST)

    @classmethod
    def unsupported(cls, name: str) -> "RegistryItem":
        return cls(name=name, kind=EntryKind.UNSUPPORTED)

    @property
    def is_priced(self) -> bool:
        return self.kind is EntryKind.PRICED

    @property
    def is_no_cost(self) -> bool:
        return self.kind is EntryKind.NO_COST

    def __repr__(self) -> str:
        return f"RegistryItem(name={self.name!r}, kind={self.kind.value})"
