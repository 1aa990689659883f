# armcosts/whatif/parser.py
from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Union

from .change import Change, ChangeType, DesiredState

__all__ = ["parse_whatif_json", "parse_changes"]


def _changes_list(obj: Any) -> List[Any]:
    """
    Accept every shape the az CLI produces:
      - {"changes": [...]}                     (--no-pretty-print)
      - {"properties": {"changes": [...]}}     (raw ARM operation result)
      - [...]                                  (bare list)
    """
    if isinstance(obj, list):
        return obj
    if isinstance(obj, Mapping):
        if isinstance(obj.get("changes"), list):
            return obj["changes"]
        props = obj.get("properties")
        if isinstance(props, Mapping) and isinstance(props.get("changes"), list):
            return props["changes"]
    raise ValueError("What-if result does not contain a 'changes' list")


def _parse_change(raw: Any) -> Change:
    if not isinstance(raw, Mapping):
        raise ValueError(f"What-if change must be an object, got {type(raw).__name__}")
    return Change(
        resource_id=raw.get("resourceId") or None,
        change_type=ChangeType.from_whatif(raw.get("changeType")),
        before=DesiredState.from_dict(raw.get("before")),
        after=DesiredState.from_dict(raw.get("after")),
    )


def parse_changes(obj: Any) -> List[Change]:
    changes = [_parse_change(c) for c in _changes_list(obj)]
    logging.debug("Parsed %d what-if changes", len(changes))
    return changes


def parse_whatif_json(data: Union[bytes, str]) -> List[Change]:
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return parse_changes(json.loads(data))
