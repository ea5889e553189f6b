"""Filesystem collaborator used by the wiring pipelines.

The merge engine never touches the disk itself; everything goes through a
``FileSystem`` so tests can swap in an in-memory implementation.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Narrow filesystem interface consumed by the core."""

    def exists(self, path: Path) -> bool:
        """Return True if path exists."""
        ...

    def read_text(self, path: Path) -> str | None:
        """Return file content, or None if the file does not exist."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Replace the whole file content."""
        ...

    def create_directories(self, path: Path) -> None:
        """Create path and any missing parents."""
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str | None:
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write content through a temp file + rename so readers never see a partial file."""
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def create_directories(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
