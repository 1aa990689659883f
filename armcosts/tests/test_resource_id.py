from __future__ import annotations

import pytest

from armcosts.errors import InvalidResourceIdError, SkipResourceError
from armcosts.whatif.resource_id import (
    RESOURCE_GROUP_TYPE,
    SUBSCRIPTION_TYPE,
    TENANT_TYPE,
    ResourceId,
    parse_resource_id,
)

SUB = "/subscriptions/sub-1"
RG = f"{SUB}/resourceGroups/rg-1"


def _chain(node: ResourceId):
    out = []
    while node is not None:
        out.append((node.resource_type, node.name))
        node = node.parent
    return out


def test_parses_resource_group_scoped_resource():
    r = parse_resource_id(f"{RG}/providers/Microsoft.Network/publicIPPrefixes/pip-1")
    assert r.name == "pip-1"
    assert r.resource_type == "Microsoft.Network/publicIPPrefixes"
    assert str(r) == f"{RG}/providers/Microsoft.Network/publicIPPrefixes/pip-1"
    assert _chain(r) == [
        ("Microsoft.Network/publicIPPrefixes", "pip-1"),
        (RESOURCE_GROUP_TYPE, "rg-1"),
        (SUBSCRIPTION_TYPE, "sub-1"),
        (TENANT_TYPE, None),
    ]


def test_child_resource_points_at_its_parent():
    r = parse_resource_id(f"{RG}/providers/Microsoft.Sql/servers/srv/databases/db")
    assert r.resource_type == "Microsoft.Sql/servers/databases"
    assert r.name == "db"
    assert r.parent.resource_type == "Microsoft.Sql/servers"
    assert str(r.parent) == f"{RG}/providers/Microsoft.Sql/servers/srv"
    assert not r.parent.is_root
    assert r.parent.parent.is_root


def test_subscription_and_tenant_level_ids():
    sub_level = parse_resource_id(f"{SUB}/providers/Microsoft.Authorization/policyDefinitions/pd")
    assert sub_level.parent.resource_type == SUBSCRIPTION_TYPE

    tenant_level = parse_resource_id("/providers/Microsoft.Management/managementGroups/mg")
    assert str(tenant_level) == "/providers/Microsoft.Management/managementGroups/mg"
    assert tenant_level.parent.resource_type == TENANT_TYPE


def test_bare_scopes_are_roots():
    assert parse_resource_id(RG).is_root
    assert parse_resource_id(SUB).is_root


def test_extension_resource_hangs_off_extended_resource():
    base = f"{RG}/providers/Microsoft.Compute/virtualMachines/vm"
    r = parse_resource_id(f"{base}/providers/Microsoft.Insights/diagnosticSettings/diag")
    assert r.resource_type == "Microsoft.Insights/diagnosticSettings"
    assert str(r.parent) == base


def test_trailing_type_without_name():
    r = parse_resource_id(f"{RG}/providers/Microsoft.Web/sites/app/config")
    assert r.name is None
    assert r.resource_type == "Microsoft.Web/sites/config"


@pytest.mark.parametrize("bad", [
    "",
    "subscriptions/sub-1",
    "/subscriptions",
    f"{RG}/providers",
    f"{RG}/providers/Microsoft.Network",
    f"{RG}//providers/Microsoft.Network/x/y",
    f"{RG}/widgets/Microsoft.Network/x/y",
])
def test_malformed_ids_are_skippable(bad):
    with pytest.raises(InvalidResourceIdError) as exc:
        parse_resource_id(bad)
    assert isinstance(exc.value, SkipResourceError)
