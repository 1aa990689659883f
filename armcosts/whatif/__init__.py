from __future__ import annotations

from .cmd import WhatIfOptions, generate_whatif_json, load_whatif_json  # re-export for main.py
from .parser import parse_whatif_json                                  # re-export for main.py

__all__ = ["WhatIfOptions", "generate_whatif_json", "load_whatif_json", "parse_whatif_json"]
