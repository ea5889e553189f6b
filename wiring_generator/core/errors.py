"""Exceptions raised while generating DI wiring artifacts.

Every error is scoped to a single artifact: the batch runner in
``wiring_generator.core.wiring`` reports it and moves on to the next one.
"""

from __future__ import annotations

from pathlib import Path


class WiringError(Exception):
    """Base class for all wiring generation failures."""


class PackageNotFoundError(WiringError):
    """No package declaration was found under a required source root."""

    def __init__(self, source_root: Path | None = None) -> None:
        self.source_root = source_root
        if source_root is None:
            message = "No package candidates to choose from"
        else:
            message = f"Could not determine existing package under {source_root}"
        super().__init__(message)


class MissingSiblingModuleError(WiringError):
    """An expected neighbouring module directory does not exist."""

    def __init__(self, module_name: str, anchor_dir: Path) -> None:
        self.module_name = module_name
        self.anchor_dir = anchor_dir
        super().__init__(
            f"Could not locate sibling '{module_name}' module for {anchor_dir}"
        )


class MalformedExistingArtifactError(WiringError):
    """An existing generated file no longer has the expected structure."""

    def __init__(self, reason: str, path: Path | None = None) -> None:
        self.reason = reason
        self.path = path
        location = f" in {path}" if path is not None else ""
        super().__init__(
            f"Refusing to merge{location}: {reason}.\n"
            + "  The file was probably restructured by hand; "
            + "restore the generated layout or merge the bindings manually."
        )


class ConfigError(WiringError):
    """wiring.yaml contains an invalid value."""
