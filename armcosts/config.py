# armcosts/config.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_RETAIL_API_URL = "https://prices.azure.com/api/retail/prices"
DEFAULT_CURRENCY = "USD"
DEFAULT_HTTP_TIMEOUT = 30.0

# ---------------- tiny helpers ----------------

def _rstrip_slash(url: str) -> str:
    return (url or "").rstrip("/")

def _package_root() -> Path:
    # <repo>/armcosts/config.py -> package dir
    return Path(__file__).resolve().parent

def _repo_root() -> Path:
    return _package_root().parent

def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.warning("Ignoring %s=%r: not a number", name, raw)
        return default


# ---------------- capacity tiers ----------------

DEFAULT_CAPACITY_TIERS_PATH = _package_root() / "data" / "capacity_tiers.json"


@dataclass(frozen=True)
class CapacityTiers:
    """
    Meter names that scale linearly with ``sku.capacity``, per resource type.

    Catalog meter naming changes independently of this tool, so the allowlist
    lives in a versioned data file rather than in code.
    """
    version: str
    tiers: Mapping[str, FrozenSet[str]] = field(default_factory=dict)

    def meters_for(self, resource_type: str) -> FrozenSet[str]:
        return self.tiers.get(resource_type, frozenset())


def load_capacity_tiers(path: str | Path | None = None) -> CapacityTiers:
    p = Path(path) if path else DEFAULT_CAPACITY_TIERS_PATH
    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    tiers: Dict[str, FrozenSet[str]] = {}
    for resource_type, meters in (raw.get("tiers") or {}).items():
        if not isinstance(meters, list):
            raise ValueError(f"{p}: tiers for {resource_type!r} must be a list of meter names")
        tiers[resource_type] = frozenset(str(m) for m in meters)

    logging.debug("Loaded capacity tiers version %s from %s", raw.get("version"), p)
    return CapacityTiers(version=str(raw.get("version") or ""), tiers=tiers)


# ---------------- config model ----------------

@dataclass(frozen=True)
class Config:
    retail_api_url: str = DEFAULT_RETAIL_API_URL
    currency: str = DEFAULT_CURRENCY
    disable_detailed_metrics: bool = False
    no_color: bool = False
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    capacity_tiers_path: Optional[str] = None
    az_binary: str = "az"


def resolve_endpoint(override: str | None = None) -> str:
    """
    Retail Prices API base URL.

    Precedence:
      1) explicit override (CLI)
      2) ARMCOSTS_API_URL
      3) default https://prices.azure.com/api/retail/prices
    """
    base = override or os.getenv("ARMCOSTS_API_URL") or DEFAULT_RETAIL_API_URL
    return _rstrip_slash(base)


def load_config(
    api_url: str | None = None,
    currency: str | None = None,
    disable_detailed_metrics: bool = False,
    no_color: bool = False,
    http_timeout: float | None = None,
    capacity_tiers_path: str | None = None,
) -> Config:
    # repo .env.local then cwd .env; neither overrides variables already set
    load_dotenv(_repo_root() / ".env.local")
    load_dotenv(Path.cwd() / ".env")

    return Config(
        retail_api_url=resolve_endpoint(api_url),
        # Currency codes are passed through to the catalog untouched.
        currency=currency or os.getenv("ARMCOSTS_CURRENCY") or DEFAULT_CURRENCY,
        disable_detailed_metrics=disable_detailed_metrics or _env_flag("ARMCOSTS_DISABLE_DETAILED_METRICS"),
        no_color=no_color or os.getenv("NO_COLOR", "").lower() in ("1", "true", "yes"),
        http_timeout=http_timeout if http_timeout is not None else _env_float("ARMCOSTS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        capacity_tiers_path=capacity_tiers_path or os.getenv("ARMCOSTS_CAPACITY_TIERS") or None,
        az_binary=os.getenv("AZ_BINARY", "az"),
    )
