"""Project root discovery and ``wiring.yaml`` loading.

Example wiring.yaml::

    di: koin                  # hilt | koin | koin-annotations
    source_set: src/main/kotlin
    extensions: [".kt"]

Every key is optional; a missing file means defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import cast

import yaml

from wiring_generator.core.errors import ConfigError
from wiring_generator.core.models import Style

CONFIG_FILE_NAME = "wiring.yaml"
DEFAULT_SOURCE_SET = "src/main/kotlin"

_ROOT_MARKERS: tuple[str, ...] = (
    CONFIG_FILE_NAME,
    "settings.gradle.kts",
    "settings.gradle",
)


class DiConvention(Enum):
    """Dependency-injection framework used by the target project."""

    HILT = "hilt"
    KOIN = "koin"
    KOIN_ANNOTATIONS = "koin-annotations"

    @property
    def style(self) -> Style | None:
        """Declaration style of merged modules; None when modules are not merged."""
        return _CONVENTION_STYLES[self]


_CONVENTION_STYLES: dict[DiConvention, Style | None] = {
    DiConvention.HILT: Style.ANNOTATION_BINDING,
    DiConvention.KOIN: Style.DSL_REGISTRATION,
    # Koin Annotations generates its bindings from @Single etc.
    DiConvention.KOIN_ANNOTATIONS: None,
}


@dataclass(frozen=True)
class WiringConfig:
    """Settings shared by every wiring command."""

    di: DiConvention = DiConvention.HILT
    source_set: str = DEFAULT_SOURCE_SET
    extensions: tuple[str, ...] = (".kt",)

    def with_convention(self, di: DiConvention | str | None) -> WiringConfig:
        """Copy with the DI convention overridden (no-op for None)."""
        if di is None:
            return self
        return replace(self, di=parse_convention(di))


def parse_convention(value: DiConvention | str) -> DiConvention:
    """Convert 'hilt' / 'koin' / 'koin-annotations' to a DiConvention."""
    if isinstance(value, DiConvention):
        return value
    try:
        return DiConvention(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in DiConvention)
        raise ConfigError(
            f"Unknown DI convention '{value}' (expected one of: {allowed})"
        ) from None


def get_project_root(start: Path | None = None) -> Path:
    """Get the root directory of the Kotlin project being wired.

    Searches upwards from ``start`` (default: cwd) for wiring.yaml or a Gradle
    settings file. Falls back to the start directory itself.
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        if any((parent / marker).is_file() for marker in _ROOT_MARKERS):
            return parent
    return current


def _parse_extensions(raw: object) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'extensions' must be a non-empty list of file suffixes")
    extensions: list[str] = []
    for item in cast(list[object], raw):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"Invalid extension entry: {item!r}")
        ext = item.strip()
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(extensions)


def load_wiring_config(project_root: Path) -> WiringConfig:
    """Load wiring.yaml from a project root.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.is_file():
        return WiringConfig()

    try:
        raw_data: object = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {config_path}: {exc}") from exc

    if raw_data is None:
        return WiringConfig()
    if not isinstance(raw_data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    data = cast(dict[str, object], raw_data)
    config = WiringConfig()

    if "di" in data:
        config = config.with_convention(str(data["di"]))

    source_set = data.get("source_set")
    if source_set is not None:
        if not isinstance(source_set, str) or not source_set.strip():
            raise ConfigError("'source_set' must be a non-empty path string")
        config = replace(config, source_set=source_set.strip().strip("/"))

    if "extensions" in data:
        config = replace(config, extensions=_parse_extensions(data["extensions"]))

    return config
