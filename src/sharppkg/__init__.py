"""SharpPkg: packages a compiled module's build output into a zip archive.

The archive contents are driven by the module manifest (`sharp.json`) plus
optional per-invocation include/exclude rules.
"""

from __future__ import annotations

from sharppkg.bundle import build_package, execute_package
from sharppkg.core import SelectionRules, select_entries
from sharppkg.io import read_module_manifest

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SelectionRules",
    "build_package",
    "execute_package",
    "read_module_manifest",
    "select_entries",
]
