"""File selection engine.

Selection runs in fixed phases. Each phase only appends entries whose archive
name is still unclaimed, so earlier phases always win:

1. the manifest file itself (archive root, under its own file name)
2. the entry point (fatal if missing)
3. native dependencies, in manifest order (warn + skip if missing)
4. user includes, in the given order (warn + skip if missing)
5. catch-all discovery of binary modules directly under the output directory,
   only when `rules.include_all_discovered` is set

Later claims on an already-claimed archive name are dropped without error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sharppkg.core.errors import MissingDependencyWarning, MissingEntryPointError, MissingIncludeWarning, PackagingWarning
from sharppkg.core.model import ArchiveEntry, ModuleManifest, SelectionRules, normalize_arcname
from sharppkg.core.rules import is_loader_file, is_module_file, matches_exclude
from sharppkg.core.sink import MessageSink, default_sink


@dataclass(frozen=True)
class SelectionResult:
    entries: tuple[ArchiveEntry, ...]
    warnings: tuple[PackagingWarning, ...] = ()

    @property
    def arcnames(self) -> list[str]:
        return [e.arcname for e in self.entries]


@dataclass
class _Selection:
    sink: MessageSink
    entries: list[ArchiveEntry] = field(default_factory=list)
    warnings: list[PackagingWarning] = field(default_factory=list)
    claimed: set[str] = field(default_factory=set)
    claimed_sources: set[Path] = field(default_factory=set)

    def add(self, source: Path, arcname: str, *, phase: str, claim_source: bool = False) -> bool:
        name = normalize_arcname(arcname)
        if name in self.claimed:
            self.sink.record(logging.DEBUG, f"{phase}: {name} already claimed, dropping {source}")
            return False
        self.claimed.add(name)
        if claim_source:
            self.claimed_sources.add(_resolved(source))
        self.entries.append(ArchiveEntry(source=source, arcname=name))
        self.sink.record(logging.DEBUG, f"{phase}: {name} <- {source}")
        return True

    def warn(self, w: PackagingWarning) -> None:
        self.warnings.append(w)
        self.sink.record(logging.WARNING, str(w))


def _resolved(p: Path) -> Path:
    try:
        return p.resolve()
    except OSError:
        return p.absolute()


def select_entries(
    manifest: ModuleManifest,
    output_dir: Path,
    rules: SelectionRules | None = None,
    *,
    sink: MessageSink | None = None,
    manifest_path: Path | None = None,
    project_dir: Path | None = None,
) -> SelectionResult:
    """Resolve the ordered, deduplicated archive entry list.

    Args:
        manifest: validated module manifest.
        output_dir: build output directory holding the compiled binaries.
        rules: include/exclude rules; defaults to `SelectionRules()`.
        sink: message sink for progress and warnings.
        manifest_path: manifest file to bundle; defaults to `manifest.path`.
        project_dir: base for relative include sources; defaults to the
            manifest's directory.

    Raises:
        MissingEntryPointError: if the entry point binary does not exist.
    """
    rules = rules if rules is not None else SelectionRules()
    output_dir = Path(output_dir)
    manifest_path = Path(manifest_path) if manifest_path is not None else manifest.path
    if manifest_path is None:
        raise ValueError("select_entries: manifest has no path; pass manifest_path")
    if project_dir is None:
        project_dir = manifest_path.parent
    project_dir = Path(project_dir)

    sel = _Selection(sink=default_sink(sink))

    # 1. manifest
    sel.add(manifest_path, manifest_path.name, phase="manifest")

    # 2. entry point
    entry_path = output_dir / manifest.entry_point
    if not entry_path.is_file():
        raise MissingEntryPointError(entry_path)
    sel.add(entry_path, manifest.entry_point, phase="entry-point", claim_source=True)

    # 3. native dependencies
    for dep in manifest.native_dependencies:
        dep_path = output_dir / dep
        if dep_path.is_file():
            sel.add(dep_path, dep, phase="native-dependency", claim_source=True)
        else:
            sel.warn(MissingDependencyWarning(dep, dep_path))

    # 4. user includes
    for spec in rules.includes:
        src = spec.source if spec.source.is_absolute() else project_dir / spec.source
        if src.is_file():
            sel.add(src, spec.arcname, phase="include")
        else:
            sel.warn(MissingIncludeWarning(src))

    # 5. catch-all discovery
    if rules.include_all_discovered:
        _discover(sel, output_dir, rules)

    return SelectionResult(entries=tuple(sel.entries), warnings=tuple(sel.warnings))


def _discover(sel: _Selection, output_dir: Path, rules: SelectionRules) -> None:
    if not output_dir.is_dir():
        return
    # Sorted by name so repeated runs produce the same entry order.
    candidates = sorted((p for p in output_dir.iterdir() if p.is_file()), key=lambda p: p.name)
    for path in candidates:
        name = path.name
        if not is_module_file(name, rules.module_suffixes):
            continue
        if _resolved(path) in sel.claimed_sources:
            continue
        if matches_exclude(path, rules.excludes):
            sel.sink.record(logging.DEBUG, f"discovery: {name} excluded by pattern")
            continue
        if rules.exclude_loader_files and is_loader_file(name):
            sel.sink.record(logging.DEBUG, f"discovery: {name} is a loader file, skipping")
            continue
        sel.add(path, name, phase="discovery")


__all__ = ["SelectionResult", "select_entries"]
