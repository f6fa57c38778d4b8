"""Error and warning taxonomy.

Fatal conditions derive from `PackagingError` and abort the run. Recoverable
conditions derive from `PackagingWarning`; they are collected and recorded,
never raised.

Every error carries a stable `code` so build tools can report the first fatal
error as a structured message.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class PackagingError(RuntimeError):
    code = "packaging_error"

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": str(self)}


class ManifestNotFoundError(PackagingError):
    code = "manifest_not_found"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"manifest not found: {self.path}")


class ManifestParseError(PackagingError):
    code = "manifest_parse"

    def __init__(self, path: Path, detail: str) -> None:
        self.path = Path(path)
        super().__init__(f"invalid JSON format in {self.path.name}: {detail}")


class ManifestValidationError(PackagingError):
    """Raised for the first missing (or malformed) required manifest field."""

    code = "manifest_validation"

    def __init__(self, field: str, detail: str | None = None) -> None:
        self.field = field
        msg = f"missing required field: {field}" if detail is None else f"{field}: {detail}"
        super().__init__(msg)


class MissingEntryPointError(PackagingError):
    code = "missing_entry_point"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"entry point not found: {self.path}")


class ArchiveWriteError(PackagingError):
    code = "archive_write"

    def __init__(self, path: Path, detail: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to write archive {self.path}: {detail}")


class RulesValidationError(PackagingError):
    code = "rules_validation"


class PackagingWarning(UserWarning):
    pass


class MissingDependencyWarning(PackagingWarning):
    def __init__(self, dependency: str, path: Path) -> None:
        self.dependency = dependency
        self.path = Path(path)
        super().__init__(f"native dependency not found: {dependency}")


class MissingIncludeWarning(PackagingWarning):
    def __init__(self, source: Path) -> None:
        self.source = Path(source)
        super().__init__(f"included file not found: {self.source}")


__all__ = [
    "ArchiveWriteError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestValidationError",
    "MissingDependencyWarning",
    "MissingEntryPointError",
    "MissingIncludeWarning",
    "PackagingError",
    "PackagingWarning",
    "RulesValidationError",
]
