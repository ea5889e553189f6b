"""Shared fixtures and helpers for the wiring generator test suite.

Provides a composable ``make_feature`` factory that lays out a small
multi-module Kotlin feature (data / domain / di and optional data source
modules), plus an in-memory ``FileSystem`` for tests that should not touch
the disk.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from wiring_generator.core.wiring import WiringGenerator
from wiring_generator.helpers.file_system import LocalFileSystem
from wiring_generator.helpers.project_config import (
    DEFAULT_SOURCE_SET,
    DiConvention,
    WiringConfig,
)
from wiring_generator.scaffolding.templates import TemplateProvider

BASE_PACKAGE = "com.acme.feature"


# ---------------------------------------------------------------------------
# Kotlin source helpers
# ---------------------------------------------------------------------------


def write_kotlin_source(
    module_dir: Path,
    package: str,
    class_name: str,
    body: str = "",
    source_set: str = DEFAULT_SOURCE_SET,
) -> Path:
    """Write ``<module>/<source_set>/<package path>/<class_name>.kt``."""
    package_dir = module_dir / source_set / Path(*package.split("."))
    package_dir.mkdir(parents=True, exist_ok=True)
    path = package_dir / f"{class_name}.kt"
    path.write_text(f"package {package}\n\n{body or f'class {class_name}'}\n")
    return path


def di_module_path(feature: Path, file_name: str) -> Path:
    """Location the generator writes a DI module of the default feature to."""
    return (
        feature / "di" / DEFAULT_SOURCE_SET / Path(*f"{BASE_PACKAGE}.di".split("."))
        / file_name
    )


# ---------------------------------------------------------------------------
# Composable feature factory
# ---------------------------------------------------------------------------


def _make_feature(
    root: Path,
    *,
    modules: Iterable[str] = ("data", "domain", "di"),
    data_sources: Iterable[str] = (),
) -> Path:
    """Create a feature directory with the requested modules.

    Args:
        root: Project root (a settings.gradle.kts marker is written there).
        modules: Layer modules to create among data / domain / di.
        data_sources: Data source modules to create (e.g. 'remoteDataSource').

    Returns:
        The feature directory containing the module directories.
    """
    (root / "settings.gradle.kts").write_text('rootProject.name = "acme"\n')
    feature = root / "feature"
    wanted = set(modules)

    if "data" in wanted:
        write_kotlin_source(
            feature / "data",
            f"{BASE_PACKAGE}.data.repository",
            "UserRepositoryImpl",
        )
        write_kotlin_source(
            feature / "data",
            f"{BASE_PACKAGE}.data.mapper",
            "UserMapper",
        )
    if "domain" in wanted:
        write_kotlin_source(
            feature / "domain",
            f"{BASE_PACKAGE}.domain.repository",
            "UserRepository",
            body="interface UserRepository",
        )
        write_kotlin_source(
            feature / "domain",
            f"{BASE_PACKAGE}.domain.usecase",
            "GetUser",
        )
    if "di" in wanted:
        write_kotlin_source(feature / "di", f"{BASE_PACKAGE}.di", "AppModules")

    for module_name in data_sources:
        write_kotlin_source(
            feature / module_name,
            f"{BASE_PACKAGE}.{module_name.lower()}",
            "Placeholder",
        )
    return feature


@pytest.fixture()
def make_feature(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: ``make_feature(modules=..., data_sources=...)``."""

    def _factory(**kwargs: object) -> Path:
        return _make_feature(tmp_path, **kwargs)  # type: ignore[arg-type]

    return _factory


@pytest.fixture()
def feature(make_feature: Callable[..., Path]) -> Path:
    """Default feature with data, domain, di and a remote data source module."""
    return make_feature(data_sources=("remoteDataSource", "localDataSource"))


def make_generator(di: DiConvention = DiConvention.HILT) -> WiringGenerator:
    """WiringGenerator on the real disk with default settings."""
    return WiringGenerator(LocalFileSystem(), TemplateProvider(), WiringConfig(di=di))


# ---------------------------------------------------------------------------
# In-memory filesystem
# ---------------------------------------------------------------------------


class MemoryFileSystem:
    """``FileSystem`` keeping files in a dict; records every write."""

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = dict(files or {})
        self.directories: set[Path] = set()
        self.writes: list[Path] = []

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.directories

    def read_text(self, path: Path) -> str | None:
        return self.files.get(path)

    def write_text(self, path: Path, content: str) -> None:
        self.files[path] = content
        self.writes.append(path)

    def create_directories(self, path: Path) -> None:
        self.directories.add(path)
