from __future__ import annotations

from .resource_registry import ResourceRegistry, get_resource_registry

__all__ = ["ResourceRegistry", "get_resource_registry"]
