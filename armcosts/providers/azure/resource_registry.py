# armcosts/providers/azure/resource_registry.py
from __future__ import annotations

from threading import Lock
from typing import Dict, Iterable, Iterator, List, Mapping

from armcosts.schema.registry_item import RegistryItem

from .analysis_services import AnalysisServicesEstimation, AnalysisServicesRetailQuery
from .app_service_plan import AppServicePlanEstimation, AppServicePlanRetailQuery
from .confidential_ledger import ConfidentialLedgerEstimation, ConfidentialLedgerRetailQuery
from .public_ip_prefix import PublicIPPrefixEstimation, PublicIPPrefixRetailQuery
from .sql_database import SQLDatabaseEstimation, SQLDatabaseRetailQuery
from .virtual_machine import VirtualMachineEstimation, VirtualMachineRetailQuery

PRICED_RESOURCES: List[RegistryItem] = [
    # scale-out meters only, multiplied by sku.capacity
    RegistryItem.priced("Microsoft.AnalysisServices/servers", AnalysisServicesRetailQuery, AnalysisServicesEstimation),
    RegistryItem.priced("Microsoft.ConfidentialLedger/ledgers", ConfidentialLedgerRetailQuery, ConfidentialLedgerEstimation),
    RegistryItem.priced("Microsoft.Compute/virtualMachines", VirtualMachineRetailQuery, VirtualMachineEstimation),
    RegistryItem.priced("Microsoft.Network/publicIPPrefixes", PublicIPPrefixRetailQuery, PublicIPPrefixEstimation),
    RegistryItem.priced("Microsoft.Sql/servers/databases", SQLDatabaseRetailQuery, SQLDatabaseEstimation),
    RegistryItem.priced("Microsoft.Web/serverfarms", AppServicePlanRetailQuery, AppServicePlanEstimation),
]

# Types that are billed through another resource (or not at all).
FREE_RESOURCES: List[str] = [
    "Microsoft.DBforMariaDB/servers/virtualNetworkRules",
    "Microsoft.Network/firewallPolicies",
    "Microsoft.Network/firewallPolicies/ruleCollectionGroups",
    "Microsoft.Network/ipGroups",
    "Microsoft.Network/networkInterfaces",
    "Microsoft.Network/networkSecurityGroups",
    "Microsoft.Network/virtualNetworks",
    "Microsoft.RecoveryServices/vaults/backupPolicies",
    "Microsoft.RecoveryServices/vaults/replicationFabrics",
    "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationNetworks/replicationNetworkMappings",
    "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationProtectionContainers",
    "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationProtectionContainers/replicationProtectionContainerMappings",
    "Microsoft.RecoveryServices/vaults/replicationPolicies",
    "Microsoft.Sql/servers",
    "Microsoft.Storage/storageAccounts/blobServices",
    "Microsoft.Storage/storageAccounts/blobServices/containers",
    "Microsoft.Web/sites",
]


class ResourceRegistry(Mapping[str, RegistryItem]):
    """
    Exact-match lookup from ARM resource type to registry item. Types that are
    not registered come back as an UNSUPPORTED item rather than raising.
    """

    def __init__(self, items: Iterable[RegistryItem]) -> None:
        self._items: Dict[str, RegistryItem] = {}
        for item in items:
            if item.name in self._items:
                raise ValueError(f"Resource type registered twice: {item.name}")
            self._items[item.name] = item

    def lookup(self, resource_type: str) -> RegistryItem:
        item = self._items.get(resource_type)
        if item is None:
            return RegistryItem.unsupported(resource_type)
        return item

    def __getitem__(self, resource_type: str) -> RegistryItem:
        return self._items[resource_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def _init_registry() -> ResourceRegistry:
    items = list(PRICED_RESOURCES)
    items.extend(RegistryItem.no_cost(name) for name in FREE_RESOURCES)
    return ResourceRegistry(items)


_resource_registry: ResourceRegistry | None = None
_lock = Lock()


def get_resource_registry() -> ResourceRegistry:
    """Build the registry once and hand out the same instance afterwards."""
    global _resource_registry
    if _resource_registry is None:
        with _lock:
            if _resource_registry is None:
                _resource_registry = _init_registry()
    return _resource_registry
