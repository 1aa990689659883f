# armcosts/providers/azure/analysis_services.py
from __future__ import annotations

import logging
from typing import Optional

from .base import BaseRetailQuery, CapacityTierEstimation


class AnalysisServicesRetailQuery(BaseRetailQuery):
    def build_filter(self, location: str) -> Optional[str]:
        sku = self.state.sku_name
        if sku is None:
            logging.error("Can't create a filter for Analysis Services when SKU is unavailable.")
            return None
        return (
            f"serviceName eq 'Azure Analysis Services' and armRegionName eq '{location}' "
            f"and skuName eq '{sku}'"
        )


class AnalysisServicesEstimation(CapacityTierEstimation):
    """Scale-out meters multiplied by the replica count in ``sku.capacity``."""
