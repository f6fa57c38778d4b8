"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import sharppkg` to fail.

We ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def make_manifest_dict(**overrides: Any) -> dict[str, Any]:
    """Create a valid manifest dict; pass `key=None` to drop a field."""
    obj: dict[str, Any] = {
        "id": "demo",
        "namespace": "x",
        "title": "Demo",
        "version": {"major": 1, "minor": 2, "patch": 0},
        "entryPoint": "demo.dll",
    }
    for k, v in overrides.items():
        if v is None:
            obj.pop(k, None)
        else:
            obj[k] = v
    return obj


def write_manifest(project_dir: Path, obj: Any, name: str = "sharp.json") -> Path:
    project_dir.mkdir(parents=True, exist_ok=True)
    p = project_dir / name
    p.write_text(json.dumps(obj, indent=2) + "\n", encoding="utf-8")
    return p


def touch_files(root: Path, *names: str) -> list[Path]:
    """Create small files under root; content is the file name."""
    out: list[Path] = []
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(name.encode("utf-8"))
        out.append(p)
    return out
