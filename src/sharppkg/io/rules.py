"""Selection rules JSON I/O.

Rules schema (every key optional):
{
  "includes": [{"source": "README.md", "target": "docs/README.md"}, ...],
  "excludes": ["Debug.dll", "obj/extra.dll"],
  "excludeLoaderFiles": true,
  "includeAllDiscovered": false,
  "moduleSuffixes": [".dll"]
}

A missing key keeps its default; an explicit `null` is rejected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sharppkg.core.errors import RulesValidationError
from sharppkg.core.model import DEFAULT_MODULE_SUFFIXES, IncludeSpec, SelectionRules

_MISSING = object()


def _get(obj: dict[str, Any], key: str, default: Any) -> Any:
    v = obj.get(key, _MISSING)
    if v is _MISSING:
        return default
    if v is None:
        raise RulesValidationError(f"{key}: must not be null")
    return v


def _require_bool(value: Any, *, where: str) -> bool:
    if not isinstance(value, bool):
        raise RulesValidationError(f"{where}: expected bool, got {type(value).__name__}")
    return value


def _require_list(value: Any, *, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise RulesValidationError(f"{where}: expected JSON array, got {type(value).__name__}")
    return value


def _include_from_json(item: Any, *, where: str) -> IncludeSpec:
    # Shorthand: a bare string is a source with the default target.
    if isinstance(item, str):
        if not item.strip():
            raise RulesValidationError(f"{where}: must be a non-empty string")
        return IncludeSpec(source=Path(item.strip()))
    if not isinstance(item, dict):
        raise RulesValidationError(f"{where}: expected object or string, got {type(item).__name__}")
    source = item.get("source")
    if not isinstance(source, str) or not source.strip():
        raise RulesValidationError(f"{where}.source: must be a non-empty string")
    target = item.get("target")
    if target is not None and not isinstance(target, str):
        raise RulesValidationError(f"{where}.target: expected str, got {type(target).__name__}")
    return IncludeSpec(source=Path(source.strip()), target=target)


def selection_rules_from_dict(obj: Any) -> SelectionRules:
    if not isinstance(obj, dict):
        raise RulesValidationError(f"rules: expected JSON object, got {type(obj).__name__}")

    includes_raw = _require_list(_get(obj, "includes", []), where="includes")
    includes = tuple(_include_from_json(x, where=f"includes[{i}]") for i, x in enumerate(includes_raw))

    excludes = _require_list(_get(obj, "excludes", []), where="excludes")
    suffixes = _require_list(_get(obj, "moduleSuffixes", list(DEFAULT_MODULE_SUFFIXES)), where="moduleSuffixes")

    try:
        return SelectionRules(
            includes=includes,
            excludes=tuple(excludes),
            exclude_loader_files=_require_bool(_get(obj, "excludeLoaderFiles", True), where="excludeLoaderFiles"),
            include_all_discovered=_require_bool(
                _get(obj, "includeAllDiscovered", False), where="includeAllDiscovered"
            ),
            module_suffixes=tuple(suffixes),
        )
    except ValueError as e:
        raise RulesValidationError(str(e)) from e


def read_selection_rules(path: str | Path) -> SelectionRules:
    p = Path(path)
    if not p.is_file():
        raise RulesValidationError(f"rules file not found: {p}")
    try:
        with p.open("r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RulesValidationError(f"invalid JSON format in {p.name}: {e}") from e
    except UnicodeDecodeError as e:
        raise RulesValidationError(f"invalid JSON format in {p.name}: not valid UTF-8: {e}") from e
    return selection_rules_from_dict(data)


__all__ = ["read_selection_rules", "selection_rules_from_dict"]
