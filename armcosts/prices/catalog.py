# armcosts/prices/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterator, Mapping, Tuple


def _to_decimal(v: Any) -> Decimal:
    try:
        return Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)


@dataclass(frozen=True)
class CatalogItem:
    """One meter row from the Retail Prices API ``Items`` array."""
    sku_name: str
    product_name: str
    meter_name: str
    retail_price: Decimal
    unit_of_measure: str
    type: str
    location: str

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "CatalogItem":
        return cls(
            sku_name=raw.get("skuName") or "",
            product_name=raw.get("productName") or "",
            meter_name=raw.get("meterName") or "",
            retail_price=_to_decimal(raw.get("retailPrice")),
            unit_of_measure=raw.get("unitOfMeasure") or "",
            type=raw.get("type") or "",
            location=raw.get("location") or raw.get("armRegionName") or "",
        )


@dataclass(frozen=True)
class CatalogResponse:
    items: Tuple[CatalogItem, ...] = ()

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def location(self) -> str:
        return self.items[0].location if self.items else ""

    @classmethod
    def from_json(cls, payload: Any) -> "CatalogResponse":
        if not isinstance(payload, Mapping):
            raise ValueError("Retail API response is not a JSON object")
        raw_items = payload.get("Items")
        if raw_items is None:
            logging.debug("Retail API response has no Items array")
            return cls()
        if not isinstance(raw_items, list):
            raise ValueError("Retail API 'Items' is not a list")
        return cls(tuple(CatalogItem.from_json(i) for i in raw_items if isinstance(i, Mapping)))
