"""Core data model for SharpPkg.

Standalone frozen dataclasses with stable fields and no circular imports:
- `ModuleVersion` / `ModuleManifest`: the validated `sharp.json` contents
- `IncludeSpec` / `SelectionRules`: per-invocation selection rules
- `ArchiveEntry`: a resolved (source, arcname) pair

This module must not import io/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

MANIFEST_FILENAME = "sharp.json"
DEFAULT_MODULE_SUFFIXES: tuple[str, ...] = (".dll",)


def normalize_arcname(name: str) -> str:
    """Return an archive name with forward slashes and no leading './'."""
    s = str(name).replace("\\", "/")
    while s.startswith("./"):
        s = s[2:]
    return s


@dataclass(frozen=True)
class ModuleVersion:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for part in ("major", "minor", "patch"):
            v = getattr(self, part)
            # Python bool is a subclass of int.
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"version.{part}: expected int, got {type(v).__name__}")
            if v < 0:
                raise ValueError(f"version.{part}: must be non-negative, got {v}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class ModuleManifest:
    id: str
    namespace: str
    title: str
    version: ModuleVersion
    entry_point: str
    native_dependencies: tuple[str, ...] = ()
    path: Path | None = None

    @property
    def identity(self) -> str:
        """Package identity, used as the archive base name."""
        return package_identity(self)


def package_identity(manifest: ModuleManifest) -> str:
    return f"{manifest.id}-{manifest.version}"


@dataclass(frozen=True)
class IncludeSpec:
    """An explicit file to bundle.

    `target` is the archive name; when omitted it defaults to the bare file
    name of `source`.
    """

    source: Path
    target: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", Path(self.source))
        if self.target is not None:
            t = normalize_arcname(self.target).strip()
            object.__setattr__(self, "target", t or None)

    @property
    def arcname(self) -> str:
        if self.target:
            return self.target
        return self.source.name

    @classmethod
    def parse(cls, text: str) -> "IncludeSpec":
        """Parse `SRC` or `SRC=TARGET`."""
        src, sep, target = str(text).partition("=")
        src = src.strip()
        if not src:
            raise ValueError(f"include: expected SRC or SRC=TARGET, got {text!r}")
        return cls(source=Path(src), target=target.strip() if sep else None)


def _as_tuple_of_str(values: Iterable[str] | None, *, where: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, (str, bytes)):
        raise ValueError(f"{where}: expected a list/tuple, got {type(values).__name__}")
    out: list[str] = []
    for v in values:
        if not isinstance(v, str) or not v.strip():
            raise ValueError(f"{where}[*]: must be a non-empty string")
        out.append(v.strip())
    return tuple(out)


@dataclass(frozen=True)
class SelectionRules:
    includes: tuple[IncludeSpec, ...] = ()
    excludes: tuple[str, ...] = ()
    exclude_loader_files: bool = True
    include_all_discovered: bool = False
    module_suffixes: tuple[str, ...] = DEFAULT_MODULE_SUFFIXES

    def __post_init__(self) -> None:
        includes = tuple(self.includes or ())
        for i, spec in enumerate(includes):
            if not isinstance(spec, IncludeSpec):
                raise ValueError(f"includes[{i}]: expected IncludeSpec, got {type(spec).__name__}")
        object.__setattr__(self, "includes", includes)
        object.__setattr__(self, "excludes", _as_tuple_of_str(self.excludes, where="excludes"))

        suffixes = _as_tuple_of_str(self.module_suffixes, where="module_suffixes")
        # Accept both "dll" and ".dll".
        suffixes = tuple(s if s.startswith(".") else f".{s}" for s in suffixes)
        object.__setattr__(self, "module_suffixes", suffixes)


@dataclass(frozen=True)
class ArchiveEntry:
    source: Path
    arcname: str

    def __str__(self) -> str:
        return f"{self.arcname} <- {self.source}"


__all__ = [
    "ArchiveEntry",
    "DEFAULT_MODULE_SUFFIXES",
    "IncludeSpec",
    "MANIFEST_FILENAME",
    "ModuleManifest",
    "ModuleVersion",
    "SelectionRules",
    "normalize_arcname",
    "package_identity",
]
