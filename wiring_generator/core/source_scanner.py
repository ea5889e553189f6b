"""Discover declared Kotlin packages under a module's source root."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from wiring_generator.helpers.helpers_logging import print_warning

DEFAULT_EXTENSIONS: tuple[str, ...] = (".kt",)

_PACKAGE_KEYWORD = "package "
_REPOSITORY_DIR = "repository"
_REPOSITORY_SUFFIX = "Repository"
_DOMAIN_MODULE = "domain"


def _iter_source_files(source_root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    suffixes = tuple(extensions)
    for path in sorted(source_root.rglob("*")):
        if path.is_file() and path.name.endswith(suffixes):
            yield path


def extract_package(text: str) -> str | None:
    """Return the package declared in a source file, or None.

    Only the first ``package`` line counts; a trailing ``;`` is tolerated.
    """
    for line in text.splitlines():
        stripped = line.lstrip()
        if stripped.startswith(_PACKAGE_KEYWORD):
            package = stripped[len(_PACKAGE_KEYWORD):].strip().rstrip(";").strip()
            return package or None
    return None


def scan_packages(
    source_root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> set[str]:
    """Collect the set of packages declared by every source file under a root.

    Args:
        source_root: Directory to walk recursively (e.g. module/src/main/kotlin).
        extensions: File suffixes treated as source files.

    Returns:
        Set of package names. Empty if the root is missing or has no sources.
    """
    packages: set[str] = set()
    if not source_root.is_dir():
        return packages

    for path in _iter_source_files(source_root, extensions):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print_warning(f"Skipping unreadable source file {path}: {exc}")
            continue
        package = extract_package(text)
        if package is not None:
            packages.add(package)

    return packages


def find_repositories(
    domain_dir: Path,
    source_set: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> dict[str, list[tuple[str, str]]]:
    """Find repository interfaces in a domain module, grouped by package.

    Only files named ``*Repository`` directly inside a ``repository`` directory
    are considered. The package is derived from the directory layout.

    Args:
        domain_dir: The domain module directory (must be named 'domain').
        source_set: Source set path relative to the module (e.g. 'src/main/kotlin').
        extensions: File suffixes treated as source files.

    Returns:
        Mapping of package -> [(simple_name, fqn), ...]. Empty when the
        directory is not a domain module or has no source set.
    """
    if domain_dir.name.lower() != _DOMAIN_MODULE:
        return {}
    source_root = domain_dir / source_set
    if not source_root.is_dir():
        return {}

    grouped: dict[str, list[tuple[str, str]]] = {}
    for path in _iter_source_files(source_root, extensions):
        if path.parent.name.lower() != _REPOSITORY_DIR:
            continue
        simple_name = path.name.split(".", 1)[0]
        if not simple_name.endswith(_REPOSITORY_SUFFIX):
            continue
        package = ".".join(path.parent.relative_to(source_root).parts)
        grouped.setdefault(package, []).append(
            (simple_name, f"{package}.{simple_name}"),
        )
    return grouped
