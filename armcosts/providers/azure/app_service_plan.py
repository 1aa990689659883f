# armcosts/providers/azure/app_service_plan.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from armcosts.errors import UnknownSkuError

from .base import BaseRetailQuery, RetailEstimation

# ARM sku name -> (plan tier as named in the catalog productName, catalog skuName)
SKU_TO_CATALOG: Dict[str, Tuple[str, str]] = {
    "F1": ("Free", "F1"),
    "D1": ("Shared", "D1"),
    "B1": ("Basic", "B1"),
    "B2": ("Basic", "B2"),
    "B3": ("Basic", "B3"),
    "S1": ("Standard", "S1"),
    "S2": ("Standard", "S2"),
    "S3": ("Standard", "S3"),
    "P1v2": ("Premium v2", "P1 v2"),
    "P2v2": ("Premium v2", "P2 v2"),
    "P3v2": ("Premium v2", "P3 v2"),
    "P1v3": ("Premium v3", "P1 v3"),
    "P2v3": ("Premium v3", "P2 v3"),
    "P3v3": ("Premium v3", "P3 v3"),
    "I1": ("Isolated", "I1"),
    "I2": ("Isolated", "I2"),
    "I3": ("Isolated", "I3"),
}


def _as_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() == "true"
    return False


class AppServicePlanRetailQuery(BaseRetailQuery):
    def is_linux_plan(self) -> bool:
        # ARM marks Linux plans with properties.reserved = true
        return _as_bool(self.state.prop("reserved", False))

    def build_filter(self, location: str) -> Optional[str]:
        sku = self.state.sku_name
        if sku is None:
            logging.error("Can't create a filter for App Service Plan when SKU is unavailable.")
            return None

        try:
            tier, catalog_sku = SKU_TO_CATALOG[sku]
        except KeyError:
            raise UnknownSkuError(sku) from None

        product = f"Azure App Service {tier} Plan"
        if self.is_linux_plan():
            product = f"{product} - Linux"

        return (
            f"serviceName eq 'Azure App Service' and armRegionName eq '{location}' "
            f"and skuName eq '{catalog_sku}' and productName eq '{product}'"
        )


class AppServicePlanEstimation(RetailEstimation):
    pass
