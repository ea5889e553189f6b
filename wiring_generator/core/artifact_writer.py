"""Persist merged DI modules."""

from __future__ import annotations

from pathlib import Path

from wiring_generator.helpers.file_system import FileSystem

from .models import MergeResult, MergeStatus


class ArtifactWriter:
    """Write merge results through a ``FileSystem``.

    The whole file is written in one go and only after the merged text is
    fully computed. Unchanged artifacts are not rewritten.
    """

    def __init__(self, fs: FileSystem) -> None:
        self.fs = fs

    def write(self, path: Path, result: MergeResult) -> MergeResult:
        """Write result.final_text to path and return the result with its path set."""
        if result.status is not MergeStatus.UNCHANGED:
            self.fs.create_directories(path.parent)
            self.fs.write_text(path, result.final_text)
        return result.with_path(path)
