"""Module manifest (`sharp.json`) I/O.

Manifest schema:
{
  "id": "demo",
  "namespace": "x",
  "title": "Demo",
  "version": {"major": 1, "minor": 2, "patch": 0},
  "entryPoint": "demo.dll",
  "nativeDependencies": ["native/lib.so"]   # optional
}

Rules:
- Required fields are checked in a fixed order (`id`, `namespace`, `version`,
  `entryPoint`, `title`) and the first missing one is reported. Validation is
  fail-fast, not aggregated.
- Empty or whitespace-only strings count as missing.
- Present but wrongly typed values are reported against their field path.
- Writer is stable: UTF-8, `indent=2`, newline-terminated.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sharppkg.core.errors import ManifestNotFoundError, ManifestParseError, ManifestValidationError
from sharppkg.core.model import ModuleManifest, ModuleVersion

_MISSING = object()

REQUIRED_FIELDS: tuple[str, ...] = ("id", "namespace", "version", "entryPoint", "title")


def _required_str(obj: dict[str, Any], key: str) -> str:
    v = obj.get(key, _MISSING)
    if v is _MISSING or v is None:
        raise ManifestValidationError(key)
    if not isinstance(v, str):
        raise ManifestValidationError(key, f"expected str, got {type(v).__name__}")
    s = v.strip()
    if not s:
        raise ManifestValidationError(key)
    return s


def _required_version(obj: dict[str, Any]) -> ModuleVersion:
    v = obj.get("version", _MISSING)
    if v is _MISSING or v is None:
        raise ManifestValidationError("version")
    if not isinstance(v, dict):
        raise ManifestValidationError("version", f"expected object, got {type(v).__name__}")

    parts: dict[str, int] = {}
    for part in ("major", "minor", "patch"):
        raw = v.get(part, _MISSING)
        if raw is _MISSING or raw is None:
            raise ManifestValidationError(f"version.{part}")
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ManifestValidationError(f"version.{part}", f"expected int, got {type(raw).__name__}")
        if raw < 0:
            raise ManifestValidationError(f"version.{part}", f"must be non-negative, got {raw}")
        parts[part] = raw
    return ModuleVersion(**parts)


def _optional_str_list(obj: dict[str, Any], key: str) -> tuple[str, ...]:
    v = obj.get(key, _MISSING)
    if v is _MISSING or v is None:
        return ()
    if not isinstance(v, list):
        raise ManifestValidationError(key, f"expected array, got {type(v).__name__}")
    out: list[str] = []
    for i, item in enumerate(v):
        if not isinstance(item, str) or not item.strip():
            raise ManifestValidationError(f"{key}[{i}]", "must be a non-empty string")
        out.append(item.strip())
    return tuple(out)


def module_manifest_from_dict(obj: Any, *, path: Path | None = None) -> ModuleManifest:
    """Validate a decoded manifest object and return a `ModuleManifest`.

    Raises:
        ManifestParseError: if `obj` is not a JSON object.
        ManifestValidationError: for the first missing or malformed field.
    """
    if not isinstance(obj, dict):
        raise ManifestParseError(path or Path("sharp.json"), f"expected JSON object, got {type(obj).__name__}")

    # Order matters: the first failing field is the one reported.
    ident = _required_str(obj, "id")
    namespace = _required_str(obj, "namespace")
    version = _required_version(obj)
    entry_point = _required_str(obj, "entryPoint")
    title = _required_str(obj, "title")
    native = _optional_str_list(obj, "nativeDependencies")

    return ModuleManifest(
        id=ident,
        namespace=namespace,
        title=title,
        version=version,
        entry_point=entry_point,
        native_dependencies=native,
        path=path,
    )


def read_module_manifest(path: str | Path) -> ModuleManifest:
    """Read and validate a module manifest from disk.

    Raises:
        ManifestNotFoundError: the file does not exist.
        ManifestParseError: the document is not well-formed JSON.
        ManifestValidationError: a required field is missing or malformed.
    """
    p = Path(path)
    if not p.is_file():
        raise ManifestNotFoundError(p)
    try:
        with p.open("r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestParseError(p, str(e)) from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(p, f"not valid UTF-8: {e}") from e

    return module_manifest_from_dict(data, path=p)


def module_manifest_to_json_dict(manifest: ModuleManifest) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": manifest.id,
        "namespace": manifest.namespace,
        "title": manifest.title,
        "version": {
            "major": manifest.version.major,
            "minor": manifest.version.minor,
            "patch": manifest.version.patch,
        },
        "entryPoint": manifest.entry_point,
    }
    if manifest.native_dependencies:
        out["nativeDependencies"] = list(manifest.native_dependencies)
    return out


def write_module_manifest(manifest: ModuleManifest, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(module_manifest_to_json_dict(manifest), indent=2) + "\n"
    p.write_text(text, encoding="utf-8")


__all__ = [
    "REQUIRED_FIELDS",
    "module_manifest_from_dict",
    "module_manifest_to_json_dict",
    "read_module_manifest",
    "write_module_manifest",
]
