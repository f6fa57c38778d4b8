"""SharpPkg I/O helpers: module manifest and selection rules JSON."""

from __future__ import annotations

from .manifest import read_module_manifest, write_module_manifest
from .rules import read_selection_rules

__all__ = [
    "read_module_manifest",
    "read_selection_rules",
    "write_module_manifest",
]
