# armcosts/schema/estimation.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from armcosts.whatif.resource_id import ResourceId


@dataclass(frozen=True)
class EstimatedResource:
    resource_id: ResourceId
    total_cost: Decimal
    delta: Optional[Decimal] = None
    location: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self.resource_id.name

    @property
    def resource_type(self) -> str:
        return self.resource_id.resource_type


@dataclass(frozen=True)
class EstimationOutput:
    total_cost: Decimal
    delta: Decimal
    resources: Tuple[EstimatedResource, ...]
    currency: str
    unsupported: Tuple[ResourceId, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        from armcosts.output.json import output_to_dict

        return output_to_dict(self)
