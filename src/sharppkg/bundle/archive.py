"""Archive materialization.

Writes an ordered entry list into a zip file. The archive is written to a
temporary file next to the destination and moved into place only after every
entry has been written, so the destination is either complete or absent.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable

from sharppkg.core.errors import ArchiveWriteError
from sharppkg.core.model import ArchiveEntry


def sha256_file(path: Path) -> str:
    """Return hex-encoded sha256 for a file on disk."""
    p = Path(path)
    h = hashlib.sha256()
    with p.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def write_archive(entries: Iterable[ArchiveEntry], dest: Path) -> Path:
    """Write `entries` in order to the zip archive `dest`.

    Raises:
        ArchiveWriteError: on any I/O failure. No file is left at `dest`'s
            temporary location; an existing `dest` is left untouched.
    """
    dest = Path(dest)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent)
    except OSError as e:
        raise ArchiveWriteError(dest, str(e)) from e

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as raw, zipfile.ZipFile(raw, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry in entries:
                zf.write(entry.source, arcname=entry.arcname)
        os.replace(tmp, dest)
    except (OSError, zipfile.BadZipFile, ValueError) as e:
        tmp.unlink(missing_ok=True)
        raise ArchiveWriteError(dest, str(e)) from e
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return dest


def write_checksum(path: Path) -> Path:
    """Write a `<archive>.sha256` sidecar holding the archive's hex digest."""
    p = Path(path)
    out = p.with_name(p.name + ".sha256")
    try:
        out.write_text(f"{sha256_file(p)}  {p.name}\n", encoding="utf-8")
    except OSError as e:
        raise ArchiveWriteError(out, str(e)) from e
    return out


__all__ = ["sha256_file", "write_archive", "write_checksum"]
