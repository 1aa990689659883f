# armcosts/whatif/change.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ChangeType(Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    NO_CHANGE = "NoChange"

    @classmethod
    def from_whatif(cls, raw: Optional[str]) -> "ChangeType":
        """
        Map a deployment what-if changeType onto the four kinds the estimator
        distinguishes.
        """
        key = (raw or "").strip().lower()
        mapped = _WHATIF_CHANGE_TYPES.get(key)
        if mapped is None:
            logging.warning("Unknown changeType %r, treating it as NoChange", raw)
            return cls.NO_CHANGE
        return mapped


_WHATIF_CHANGE_TYPES: Dict[str, ChangeType] = {
    "create": ChangeType.CREATE,
    "delete": ChangeType.DELETE,
    "modify": ChangeType.UPDATE,
    "deploy": ChangeType.UPDATE,
    "update": ChangeType.UPDATE,
    "nochange": ChangeType.NO_CHANGE,
    "ignore": ChangeType.NO_CHANGE,
    "unsupported": ChangeType.NO_CHANGE,
}


def _int_or_none(v: Any) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Sku:
    name: Optional[str] = None
    capacity: Optional[int] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Sku":
        return cls(
            name=raw.get("name"),
            capacity=_int_or_none(raw.get("capacity")),
        )


@dataclass(frozen=True)
class DesiredState:
    location: Optional[str] = None
    sku: Optional[Sku] = None
    properties: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> Optional["DesiredState"]:
        if raw is None:
            return None
        if not isinstance(raw, Mapping):
            raise ValueError(f"What-if resource state must be an object, got {type(raw).__name__}")
        props = raw.get("properties") or {}
        if not isinstance(props, Mapping):
            raise ValueError(f"What-if resource properties must be an object, got {type(props).__name__}")
        sku_raw = raw.get("sku")
        return cls(
            location=raw.get("location") or None,
            sku=Sku.from_dict(sku_raw) if isinstance(sku_raw, Mapping) else None,
            properties=dict(props),
        )

    @property
    def sku_name(self) -> Optional[str]:
        return self.sku.name if self.sku else None

    def prop(self, path: str, default: Any = None) -> Any:
        """Dotted lookup into properties, e.g. ``hardwareProfile.vmSize``."""
        cur: Any = self.properties
        for key in path.split("."):
            if not isinstance(cur, Mapping) or key not in cur:
                return default
            cur = cur[key]
        return cur


@dataclass(frozen=True)
class Change:
    resource_id: Optional[str]
    change_type: ChangeType
    before: Optional[DesiredState] = None
    after: Optional[DesiredState] = None

    @property
    def desired_state(self) -> Optional[DesiredState]:
        return self.after or self.before
