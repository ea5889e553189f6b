"""Package inference and idempotent merging of DI modules."""

from wiring_generator.core.errors import (
    ConfigError,
    MalformedExistingArtifactError,
    MissingSiblingModuleError,
    PackageNotFoundError,
    WiringError,
)
from wiring_generator.core.models import (
    Binding,
    MergeResult,
    MergeStatus,
    ParsedArtifact,
    Style,
)

__all__ = [
    "Binding",
    "ConfigError",
    "MalformedExistingArtifactError",
    "MergeResult",
    "MergeStatus",
    "MissingSiblingModuleError",
    "PackageNotFoundError",
    "ParsedArtifact",
    "Style",
    "WiringError",
]
