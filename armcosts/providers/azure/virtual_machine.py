# armcosts/providers/azure/virtual_machine.py
from __future__ import annotations

import logging
from typing import Optional

from armcosts.prices.catalog import CatalogItem
from armcosts.whatif.change import DesiredState

from .base import BaseRetailQuery, RetailEstimation

_DISCOUNTED_SKU_MARKERS = ("Spot", "Low Priority")


def vm_size(state: DesiredState) -> Optional[str]:
    return state.prop("hardwareProfile.vmSize") or state.sku_name


def is_windows(state: DesiredState) -> bool:
    os_type = state.prop("storageProfile.osDisk.osType")
    if isinstance(os_type, str):
        return os_type.lower() == "windows"
    publisher = state.prop("storageProfile.imageReference.publisher") or ""
    return "windows" in str(publisher).lower()


class VirtualMachineRetailQuery(BaseRetailQuery):
    def build_filter(self, location: str) -> Optional[str]:
        size = vm_size(self.state)
        if size is None:
            logging.error("Can't create a filter for Virtual Machine when VM size is unavailable.")
            return None
        return (
            f"serviceName eq 'Virtual Machines' and armRegionName eq '{location}' "
            f"and armSkuName eq '{size}'"
        )


class VirtualMachineEstimation(RetailEstimation):
    """
    The catalog returns Linux, Windows, Spot and Low Priority meters for the
    same size; only the regular meter for the VM's OS is billed.
    """

    def item_matches(self, item: CatalogItem, state: DesiredState) -> bool:
        if any(marker in item.sku_name for marker in _DISCOUNTED_SKU_MARKERS):
            return False
        windows_meter = item.product_name.endswith("Windows")
        return windows_meter == is_windows(state)
