# armcosts/output/json.py
from __future__ import annotations

import json
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Any, Dict, Optional

from armcosts.schema.estimation import EstimatedResource, EstimationOutput
from armcosts.whatif.resource_id import ResourceId


# ---- rounding helpers (banker's rounding to 6 dp) ----

_D6 = Decimal("0.000001")

def _round6(v: Decimal) -> Decimal:
    return v.quantize(_D6, rounding=ROUND_HALF_EVEN)

def _num(v: Optional[Decimal]) -> Optional[float]:
    """Convert to a JSON-safe number (float) after rounding to 6 dp."""
    if v is None:
        return None
    return float(_round6(v))


# ---- builders ----

def _resource_json(resource: EstimatedResource) -> Dict[str, Any]:
    return {
        "id":        str(resource.resource_id),
        "name":      resource.name,
        "type":      resource.resource_type,
        "location":  resource.location,
        "totalCost": _num(resource.total_cost),
        "delta":     _num(resource.delta),
    }

def _unsupported_json(rid: ResourceId) -> Dict[str, Any]:
    return {
        "id":   str(rid),
        "name": rid.name,
        "type": rid.resource_type,
    }


# ---- public API ----

def output_to_dict(output: EstimationOutput) -> Dict[str, Any]:
    return {
        "totalCost":            _num(output.total_cost),
        "delta":                _num(output.delta),
        "currency":             output.currency,
        "resources":            [_resource_json(r) for r in output.resources],
        "unsupportedResources": [_unsupported_json(u) for u in output.unsupported],
    }


def to_json(output: EstimationOutput, pretty: bool = False) -> bytes:
    """
    Serialize an EstimationOutput. Amounts are rounded to 6 decimal places
    with banker's rounding; a resource without a before-state has delta null.
    """
    payload = output_to_dict(output)
    if pretty:
        return json.dumps(payload, indent=2, separators=(", ", ": ")).encode("utf-8")
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")
