"""Package builder: manifest -> entry selection -> archive.

`build_package()` raises on the first fatal error. `execute_package()` wraps
it for build tools that only consume a success flag plus the first error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sharppkg.bundle.archive import write_archive, write_checksum
from sharppkg.core.errors import PackagingError, PackagingWarning
from sharppkg.core.model import MANIFEST_FILENAME, ArchiveEntry, ModuleManifest, SelectionRules
from sharppkg.core.select import select_entries
from sharppkg.core.sink import MessageSink, default_sink
from sharppkg.io.manifest import read_module_manifest

ARCHIVE_SUFFIX = ".zip"


@dataclass(frozen=True)
class PackageResult:
    archive_path: Path
    manifest: ModuleManifest
    entries: tuple[ArchiveEntry, ...]
    warnings: tuple[PackagingWarning, ...] = ()
    checksum_path: Path | None = None


@dataclass(frozen=True)
class PackageOutcome:
    ok: bool
    archive_path: Path | None = None
    error: dict[str, Any] | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "archive": str(self.archive_path) if self.archive_path is not None else None,
            "error": self.error,
            "warnings": list(self.warnings),
        }


def archive_path_for(manifest: ModuleManifest, package_output_dir: Path) -> Path:
    return Path(package_output_dir) / f"{manifest.identity}{ARCHIVE_SUFFIX}"


def build_package(
    project_dir: Path,
    output_dir: Path,
    package_output_dir: Path,
    rules: SelectionRules | None = None,
    *,
    sink: MessageSink | None = None,
    manifest_name: str = MANIFEST_FILENAME,
    checksum: bool = False,
) -> PackageResult:
    """Build `{package_output_dir}/{id}-{major}.{minor}.{patch}.zip`.

    Raises:
        PackagingError: any fatal error. The destination archive does not
            exist afterwards.
    """
    sink = default_sink(sink)
    project_dir = Path(project_dir)
    sink.record(logging.INFO, "starting package generation")

    manifest = read_module_manifest(project_dir / manifest_name)
    dest = archive_path_for(manifest, package_output_dir)

    try:
        selection = select_entries(manifest, Path(output_dir), rules, sink=sink, project_dir=project_dir)
        write_archive(selection.entries, dest)
        checksum_path = write_checksum(dest) if checksum else None
    except PackagingError:
        # Do not leave a stale archive under the identity of a failed run.
        dest.unlink(missing_ok=True)
        raise

    sink.record(logging.INFO, f"package created: {dest}")
    return PackageResult(
        archive_path=dest,
        manifest=manifest,
        entries=selection.entries,
        warnings=selection.warnings,
        checksum_path=checksum_path,
    )


def execute_package(
    project_dir: Path,
    output_dir: Path,
    package_output_dir: Path,
    rules: SelectionRules | None = None,
    *,
    sink: MessageSink | None = None,
    manifest_name: str = MANIFEST_FILENAME,
    checksum: bool = False,
) -> PackageOutcome:
    """Run `build_package()` and report a boolean outcome instead of raising."""
    sink = default_sink(sink)
    try:
        result = build_package(
            project_dir,
            output_dir,
            package_output_dir,
            rules,
            sink=sink,
            manifest_name=manifest_name,
            checksum=checksum,
        )
    except PackagingError as e:
        sink.record(logging.ERROR, str(e))
        return PackageOutcome(ok=False, error=e.to_dict())

    return PackageOutcome(
        ok=True,
        archive_path=result.archive_path,
        warnings=tuple(str(w) for w in result.warnings),
    )


__all__ = [
    "ARCHIVE_SUFFIX",
    "PackageOutcome",
    "PackageResult",
    "archive_path_for",
    "build_package",
    "execute_package",
]
