# armcosts/providers/azure/sql_database.py
from __future__ import annotations

import logging
from typing import Optional

from .base import BaseRetailQuery, RetailEstimation

SERVICE_ID = "DZH3180HX10K"


class SQLDatabaseRetailQuery(BaseRetailQuery):
    def build_filter(self, location: str) -> Optional[str]:
        sku = self.state.sku_name
        if sku is None:
            logging.error("Can't create a filter for Azure SQL when SKU is unavailable.")
            return None
        return f"serviceId eq '{SERVICE_ID}' and armRegionName eq '{location}' and skuName eq '{sku}'"


class SQLDatabaseEstimation(RetailEstimation):
    pass
