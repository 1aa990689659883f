# armcosts/providers/azure/confidential_ledger.py
from __future__ import annotations

from typing import Optional

from .base import BaseRetailQuery, RetailEstimation


class ConfidentialLedgerRetailQuery(BaseRetailQuery):
    def build_filter(self, location: str) -> Optional[str]:
        return f"serviceName eq 'Azure Confidential Ledger' and armRegionName eq '{location}'"


class ConfidentialLedgerEstimation(RetailEstimation):
    pass
