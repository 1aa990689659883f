# armcosts/whatif/resource_id.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from armcosts.errors import InvalidResourceIdError

TENANT_TYPE = "Microsoft.Resources/tenants"
SUBSCRIPTION_TYPE = "Microsoft.Resources/subscriptions"
RESOURCE_GROUP_TYPE = "Microsoft.Resources/resourceGroups"

ROOT_TYPES = frozenset({TENANT_TYPE, SUBSCRIPTION_TYPE, RESOURCE_GROUP_TYPE})


@dataclass(frozen=True)
class ResourceId:
    """
    One node of an ARM resource id tree.

    ``parent`` points at the enclosing scope (child resource -> parent resource
    -> resource group -> subscription -> tenant). ``name`` is None when the id
    ends with a type segment and no name.
    """
    name: Optional[str]
    resource_type: str
    parent: Optional["ResourceId"] = field(default=None, repr=False)
    id: str = ""

    def __str__(self) -> str:
        return self.id

    @property
    def is_root(self) -> bool:
        return self.resource_type in ROOT_TYPES


_TENANT = ResourceId(name=None, resource_type=TENANT_TYPE, parent=None, id="/")


def _segments(resource_id: str) -> List[str]:
    if not resource_id or not resource_id.startswith("/"):
        raise InvalidResourceIdError(f"Resource id must start with '/': {resource_id!r}")
    parts = resource_id.strip("/").split("/")
    if any(p == "" for p in parts):
        raise InvalidResourceIdError(f"Resource id contains an empty segment: {resource_id!r}")
    return parts


def parse_resource_id(resource_id: str) -> ResourceId:
    """
    Parse an ARM id such as

      /subscriptions/{s}/resourceGroups/{rg}/providers/{ns}/{type}/{name}/{child}/{childName}

    into a ResourceId whose parent chain ends at the tenant root. Extension
    resources (a second ``/providers/`` section) hang off the resource they
    extend.
    """
    parts = _segments(resource_id)
    node = _TENANT
    i = 0

    if parts[0].lower() == "subscriptions":
        if len(parts) < 2:
            raise InvalidResourceIdError(f"Missing subscription id: {resource_id!r}")
        node = ResourceId(parts[1], SUBSCRIPTION_TYPE, node, f"/subscriptions/{parts[1]}")
        i = 2
        if i < len(parts) and parts[i].lower() == "resourcegroups":
            if i + 1 >= len(parts):
                raise InvalidResourceIdError(f"Missing resource group name: {resource_id!r}")
            node = ResourceId(parts[i + 1], RESOURCE_GROUP_TYPE, node, f"{node.id}/resourceGroups/{parts[i + 1]}")
            i += 2

    while i < len(parts):
        if parts[i].lower() != "providers" or i + 1 >= len(parts):
            raise InvalidResourceIdError(f"Expected 'providers/<namespace>' at segment {i}: {resource_id!r}")
        namespace = parts[i + 1]
        i += 2
        if i >= len(parts) or parts[i].lower() == "providers":
            raise InvalidResourceIdError(f"Provider namespace {namespace!r} has no resource type: {resource_id!r}")

        base = "" if node is _TENANT else node.id
        first = True
        while i < len(parts) and parts[i].lower() != "providers":
            type_segment = parts[i]
            name = parts[i + 1] if i + 1 < len(parts) else None
            if first:
                resource_type = f"{namespace}/{type_segment}"
                id_str = f"{base}/providers/{namespace}/{type_segment}"
            else:
                resource_type = f"{node.resource_type}/{type_segment}"
                id_str = f"{node.id}/{type_segment}"
            if name is not None:
                id_str = f"{id_str}/{name}"
            node = ResourceId(name, resource_type, node, id_str)
            first = False
            i += 2

    return node
