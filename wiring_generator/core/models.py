"""Value types shared by the scanner, merge engine and wiring pipelines."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path


class Style(Enum):
    """Declaration idiom used inside one generated DI module."""

    ANNOTATION_BINDING = "annotation-binding"
    DSL_REGISTRATION = "dsl-registration"


class MergeStatus(Enum):
    """Outcome of merging one artifact."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Binding:
    """One desired interface -> implementation wiring.

    Attributes:
        interface_import_path: Fully qualified interface name
            (e.g. 'com.acme.domain.repository.UserRepository').
        implementation_import_path: Fully qualified implementation name.
        signature: Canonical text used to detect the binding in an existing file.
        declaration_text: Indented block emitted into the module body.
        extra_import_paths: Further qualified names the declaration refers to.
    """

    interface_import_path: str
    implementation_import_path: str
    signature: str
    declaration_text: str
    extra_import_paths: tuple[str, ...] = ()

    @property
    def import_paths(self) -> tuple[str, ...]:
        """Qualified names this binding needs imported."""
        return (
            self.interface_import_path,
            self.implementation_import_path,
            *self.extra_import_paths,
        )


@dataclass(frozen=True)
class ParsedArtifact:
    """Structured view of a previously generated module file.

    Attributes:
        imports: Trimmed import lines, e.g. 'import dagger.Binds'.
        declaration_body: Text strictly inside the declaration container.
        preamble: Verbatim text before the package line (license headers etc).
        header: Verbatim text from the end of the import block through the
            container's opening brace, or None when no container was parsed.
        trailer: Verbatim text after the container's closing brace.
        source_text: Original file content, or None if no file existed.
    """

    imports: frozenset[str] = frozenset()
    declaration_body: str = ""
    preamble: str = ""
    header: str | None = None
    trailer: str = ""
    source_text: str | None = None

    @classmethod
    def empty(cls) -> ParsedArtifact:
        """Value used when the artifact does not exist yet."""
        return cls()

    @property
    def exists(self) -> bool:
        return self.source_text is not None


@dataclass(frozen=True)
class MergeResult:
    """Final text and status of one artifact."""

    status: MergeStatus
    output_path: Path | None
    final_text: str

    def with_path(self, path: Path) -> MergeResult:
        return replace(self, output_path=path)

    def report_line(self, artifact_name: str) -> str:
        """Format '<artifact-name>: <path> (<status>)'; '-' stands in for no path."""
        location = self.output_path if self.output_path is not None else "-"
        return f"{artifact_name}: {location} ({self.status.value})"
