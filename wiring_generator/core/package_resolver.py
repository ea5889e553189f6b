"""Pick the package a generated artifact should join.

Modules in a clean-architecture project usually contain several packages
(``com.acme.data``, ``com.acme.data.repository``, ``com.acme.data.mapper`` ...).
The resolver ranks what a scan actually found; it never makes a package up.

Resolution order for a preferred role ``r``:
    1. a candidate ending with ``.r``            -> returned as is
    2. a candidate containing ``.r.``            -> truncated right after ``.r``
    3. otherwise the shortest candidate          -> first of ties

Example:
    >>> resolve({"com.x.domain.something", "com.x.other"}, "domain")
    'com.x.domain'
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from .errors import PackageNotFoundError
from .source_scanner import DEFAULT_EXTENSIONS, scan_packages

LAYER_ROLES: frozenset[str] = frozenset({"data", "domain", "di"})

_PRESENTATION = ".presentation"
_PRESENTATION_ANCHORS: tuple[str, ...] = (".api", ".domain", ".data")

Scanner = Callable[[Path, Iterable[str]], set[str]]


def resolve(candidates: Iterable[str], preferred_role: str | None = None) -> str:
    """Select the best-fit package among scanned candidates.

    Args:
        candidates: Package names discovered under a source root.
        preferred_role: Layer name the package should represent (e.g. 'domain').

    Returns:
        The chosen package name.

    Raises:
        PackageNotFoundError: If there are no candidates.
    """
    ordered = sorted(set(candidates))
    if not ordered:
        raise PackageNotFoundError()

    if preferred_role:
        suffix = f".{preferred_role}"

        for candidate in ordered:
            if candidate.endswith(suffix):
                return candidate

        interior = f"{suffix}."
        for candidate in ordered:
            idx = candidate.find(interior)
            if idx >= 0:
                return candidate[: idx + len(suffix)]

    return min(ordered, key=len)


def role_for_module(module_dir: Path) -> str | None:
    """Return the layer role implied by a module directory name, if any."""
    name = module_dir.name.lower()
    return name if name in LAYER_ROLES else None


def truncate_at(package: str, marker: str) -> str:
    """Cut a package right after the first occurrence of marker.

    ``truncate_at("com.x.di.modules", ".di")`` -> ``"com.x.di"``.
    """
    idx = package.find(marker)
    if idx < 0:
        return package
    return package[: idx + len(marker)]


def find_module_package(
    module_dir: Path,
    source_set: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    scanner: Scanner = scan_packages,
) -> str:
    """Scan a module's source set and resolve its canonical package.

    Args:
        module_dir: Module directory (its name hints the role: data/domain/di).
        source_set: Source set path relative to the module.
        extensions: File suffixes treated as source files.
        scanner: Package scanner, replaceable in tests.

    Raises:
        PackageNotFoundError: If the source set declares no packages.
    """
    source_root = module_dir / source_set
    candidates = scanner(source_root, extensions)
    if not candidates:
        raise PackageNotFoundError(source_root)
    return resolve(candidates, role_for_module(module_dir))


def _presentation_from_anchor(candidate: str, anchor: str) -> str:
    if candidate.endswith(anchor):
        base = candidate[: -len(anchor)]
    else:
        base = candidate[: candidate.find(f"{anchor}.")]
    return base + _PRESENTATION


def infer_presentation_package(candidates: Iterable[str]) -> str | None:
    """Infer where presentation-layer code should live.

    An existing ``.presentation`` package wins. Otherwise the base of the first
    api/domain/data package (in that priority) gets ``.presentation`` appended,
    and as a last resort the shortest candidate does.
    """
    ordered = sorted(set(candidates))
    if not ordered:
        return None

    for candidate in ordered:
        if candidate.endswith(_PRESENTATION):
            return candidate

    for anchor in _PRESENTATION_ANCHORS:
        for candidate in ordered:
            if candidate.endswith(anchor) or f"{anchor}." in candidate:
                return _presentation_from_anchor(candidate, anchor)

    shortest = min(ordered, key=len)
    if shortest.endswith(_PRESENTATION):
        return shortest
    return shortest + _PRESENTATION
