# armcosts/providers/azure/public_ip_prefix.py
from __future__ import annotations

from typing import Optional

from .base import BaseRetailQuery, RetailEstimation


class PublicIPPrefixRetailQuery(BaseRetailQuery):
    def build_filter(self, location: str) -> Optional[str]:
        return (
            f"serviceName eq 'Virtual Network' and armRegionName eq '{location}' "
            f"and productName eq 'Public IP Prefix'"
        )


class PublicIPPrefixEstimation(RetailEstimation):
    pass
