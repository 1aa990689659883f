from __future__ import annotations

import json

import pytest

from armcosts.whatif.change import ChangeType, DesiredState
from armcosts.whatif.parser import parse_changes, parse_whatif_json

RID = "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Network/publicIPPrefixes/pip"


def _raw(change_type="Create", before=None, after=None, resource_id=RID):
    return {"resourceId": resource_id, "changeType": change_type, "before": before, "after": after}


def test_accepts_changes_at_top_level_nested_and_bare():
    raw = [_raw(after={"location": "eastus"})]
    assert len(parse_changes({"changes": raw})) == 1
    assert len(parse_changes({"properties": {"changes": raw}})) == 1
    assert len(parse_changes(raw)) == 1


def test_rejects_payload_without_changes():
    with pytest.raises(ValueError):
        parse_changes({"status": "Succeeded"})


@pytest.mark.parametrize("raw,expected", [
    ("Create", ChangeType.CREATE),
    ("Delete", ChangeType.DELETE),
    ("Modify", ChangeType.UPDATE),
    ("Deploy", ChangeType.UPDATE),
    ("NoChange", ChangeType.NO_CHANGE),
    ("Ignore", ChangeType.NO_CHANGE),
    ("Unsupported", ChangeType.NO_CHANGE),
])
def test_change_type_mapping(raw, expected):
    assert ChangeType.from_whatif(raw) is expected


def test_unknown_change_type_is_no_change_with_warning(caplog):
    with caplog.at_level("WARNING"):
        assert ChangeType.from_whatif("Teleport") is ChangeType.NO_CHANGE
    assert "Teleport" in caplog.text


def test_parse_whatif_json_reads_states():
    payload = {
        "changes": [
            _raw(
                "Modify",
                before={"location": "westeurope", "sku": {"name": "S1", "capacity": 1}},
                after={
                    "location": "westeurope",
                    "sku": {"name": "S2", "capacity": "3"},
                    "properties": {"hardwareProfile": {"vmSize": "Standard_B1s"}},
                },
            ),
        ]
    }
    (c,) = parse_whatif_json(json.dumps(payload).encode("utf-8"))
    assert c.resource_id == RID
    assert c.change_type is ChangeType.UPDATE
    assert c.before.sku.name == "S1"
    assert c.after.sku.capacity == 3
    assert c.desired_state is c.after
    assert c.after.prop("hardwareProfile.vmSize") == "Standard_B1s"
    assert c.after.prop("hardwareProfile.missing", "x") == "x"


def test_unparseable_capacity_is_absent():
    s = DesiredState.from_dict({"sku": {"name": "S1", "capacity": "many"}})
    assert s.sku.capacity is None


def test_missing_states_and_resource_id():
    (c,) = parse_changes([{"changeType": "Delete"}])
    assert c.resource_id is None
    assert c.desired_state is None


def test_delete_falls_back_to_before_state():
    (c,) = parse_changes([_raw("Delete", before={"location": "eastus"})])
    assert c.desired_state is c.before


@pytest.mark.parametrize("bad", [
    _raw(after="eastus"),
    _raw(before=["not", "a", "state"]),
    _raw(after={"location": "eastus", "properties": ["x"]}),
])
def test_malformed_states_raise_value_error(bad):
    with pytest.raises(ValueError):
        parse_changes([bad])
