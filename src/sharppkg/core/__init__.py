"""SharpPkg core: data model, selection rules and the selection engine.

This package must not import io/bundle/cli to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import (
    ArchiveWriteError,
    ManifestNotFoundError,
    ManifestParseError,
    ManifestValidationError,
    MissingDependencyWarning,
    MissingEntryPointError,
    MissingIncludeWarning,
    PackagingError,
    PackagingWarning,
    RulesValidationError,
)
from .model import (
    DEFAULT_MODULE_SUFFIXES,
    MANIFEST_FILENAME,
    ArchiveEntry,
    IncludeSpec,
    ModuleManifest,
    ModuleVersion,
    SelectionRules,
    package_identity,
)
from .rules import is_loader_file, is_module_file, matches_exclude
from .select import SelectionResult, select_entries
from .sink import LoggingSink, MessageSink, RecordingSink

__all__ = [
    "ArchiveEntry",
    "ArchiveWriteError",
    "DEFAULT_MODULE_SUFFIXES",
    "IncludeSpec",
    "LoggingSink",
    "MANIFEST_FILENAME",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestValidationError",
    "MessageSink",
    "MissingDependencyWarning",
    "MissingEntryPointError",
    "MissingIncludeWarning",
    "ModuleManifest",
    "ModuleVersion",
    "PackagingError",
    "PackagingWarning",
    "RecordingSink",
    "RulesValidationError",
    "SelectionResult",
    "SelectionRules",
    "is_loader_file",
    "is_module_file",
    "matches_exclude",
    "package_identity",
    "select_entries",
]
