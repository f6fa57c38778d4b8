"""Pure file-name predicates used by catch-all discovery.

None of these touch the filesystem; they only compare names and paths.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Iterable

# Files belonging to the hosting loader runtime.
LOADER_PREFIXES: tuple[str, ...] = ("SharpMC.SharpLoader", "SharpLoader")
LOADER_RESERVED_NAMES: tuple[str, ...] = ("SharpLoader.dll",)


def _norm_path_text(path: str | PurePath) -> str:
    return str(path).replace("\\", "/")


def is_loader_file(name: str) -> bool:
    """True if `name` belongs to the loader family."""
    lowered = name.lower()
    if any(lowered.startswith(p.lower()) for p in LOADER_PREFIXES):
        return True
    return name in LOADER_RESERVED_NAMES


def is_module_file(name: str, suffixes: Iterable[str]) -> bool:
    """True if `name` ends with one of the binary module suffixes (case-insensitive)."""
    lowered = name.lower()
    return any(lowered.endswith(s.lower()) for s in suffixes)


def matches_exclude(path: str | PurePath, patterns: Iterable[str]) -> bool:
    """True if a discovered file is excluded by any user pattern.

    A pattern matches when it equals the file name or is a suffix of the full
    path, both compared case-insensitively. Separators are normalized to '/'.
    """
    full = _norm_path_text(path).lower()
    name = full.rsplit("/", 1)[-1]
    for pattern in patterns:
        p = _norm_path_text(pattern).strip().lower()
        if not p:
            continue
        if p == name or full.endswith(p):
            return True
    return False


__all__ = [
    "LOADER_PREFIXES",
    "LOADER_RESERVED_NAMES",
    "is_loader_file",
    "is_module_file",
    "matches_exclude",
]
