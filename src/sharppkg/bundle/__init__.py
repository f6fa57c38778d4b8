"""SharpPkg bundle output (package-on-disk format).

A package is a single zip archive named `{id}-{major}.{minor}.{patch}.zip`
holding, in order:
- sharp.json at the archive root
- the entry point binary
- native dependencies, user includes, and optionally discovered modules
"""

from __future__ import annotations

from .archive import write_archive
from .package import PackageOutcome, PackageResult, build_package, execute_package

__all__ = [
    "PackageOutcome",
    "PackageResult",
    "build_package",
    "execute_package",
    "write_archive",
]
