"""Generate and merge the DI modules of a clean-architecture Kotlin project.

Project layout assumed (module directories are siblings)::

    feature/
        data/src/main/kotlin/...            data layer (repository impls)
        domain/src/main/kotlin/...          domain layer (interfaces, use cases)
        di/src/main/kotlin/...              DI modules written here
        remoteDataSource/src/main/kotlin/   optional data source impl modules
        localDataSource/src/main/kotlin/
        dataSource/src/main/kotlin/

Each ``wire_*`` method handles one artifact: it infers packages from the
existing sources, builds the desired bindings and merges them into
``RepositoryModule.kt``, ``DataSourceModule.kt`` or ``UseCaseModule.kt``.
``run_batch`` runs several of them and keeps going when one fails.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from wiring_generator.helpers.file_system import FileSystem
from wiring_generator.helpers.helpers_logging import print_error, print_status
from wiring_generator.helpers.project_config import WiringConfig
from wiring_generator.scaffolding.templates import TemplateProvider, module_file_name

from .artifact_parser import parse
from .artifact_writer import ArtifactWriter
from .declaration_synthesizer import (
    annotation_binding,
    dsl_binding,
    dsl_factory_binding,
    sort_bindings,
)
from .errors import MissingSiblingModuleError, WiringError
from .merge_engine import merge
from .models import Binding, MergeResult, MergeStatus, Style
from .package_resolver import Scanner, find_module_package, truncate_at
from .source_scanner import scan_packages

_REPOSITORY_SUFFIX = "Repository"


class DataSourceKind(Enum):
    """Data source flavours: (sub-package / sibling module, class suffix)."""

    COMBINED = ("dataSource", "DataSource")
    REMOTE = ("remoteDataSource", "RemoteDataSource")
    LOCAL = ("localDataSource", "LocalDataSource")

    @property
    def module_name(self) -> str:
        return self.value[0]

    @property
    def class_suffix(self) -> str:
        return self.value[1]


def strip_repository_suffix(name: str) -> str:
    """'UserRepository' -> 'User'; names that are only 'Repository' stay as is."""
    if name.endswith(_REPOSITORY_SUFFIX) and len(name) > len(_REPOSITORY_SUFFIX):
        return name[: -len(_REPOSITORY_SUFFIX)]
    return name


@dataclass(frozen=True)
class ArtifactOutcome:
    """Result (or failure) of one artifact in a batch."""

    artifact: str
    result: MergeResult | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def report_line(self) -> str:
        if self.result is None:
            return f"{self.artifact}: failed ({self.error})"
        return self.result.report_line(self.artifact)


@dataclass
class GenerationReport:
    """Aggregated outcomes of a wiring run."""

    outcomes: list[ArtifactOutcome] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(outcome.failed for outcome in self.outcomes)

    def lines(self) -> list[str]:
        return [outcome.report_line() for outcome in self.outcomes]

    def summary(self, title: str = "Wiring generation completed:") -> str:
        return "\n".join([title, *(f"- {line}" for line in self.lines())])


ArtifactStep = tuple[str, Callable[[], MergeResult]]


def run_batch(steps: Iterable[ArtifactStep]) -> GenerationReport:
    """Run artifact steps in order; a WiringError only aborts its own step."""
    report = GenerationReport()
    for artifact, step in steps:
        try:
            result = step()
        except WiringError as exc:
            outcome = ArtifactOutcome(artifact, error=str(exc))
            print_error(outcome.report_line())
        else:
            outcome = ArtifactOutcome(artifact, result=result)
            print_status(outcome.report_line(), result.status)
        report.outcomes.append(outcome)
    return report


class WiringGenerator:
    """Infers packages and merges DI modules for one project."""

    def __init__(
        self,
        fs: FileSystem,
        templates: TemplateProvider,
        config: WiringConfig,
        scanner: Scanner = scan_packages,
    ) -> None:
        self.fs = fs
        self.templates = templates
        self.config = config
        self.scanner = scanner
        self.writer = ArtifactWriter(fs)

    @property
    def style(self) -> Style | None:
        return self.config.di.style

    # -- package inference -------------------------------------------------

    def module_package(self, module_dir: Path) -> str:
        """Canonical package of a module, inferred from its sources."""
        return find_module_package(
            module_dir,
            self.config.source_set,
            self.config.extensions,
            scanner=self.scanner,
        )

    def sibling_module(self, anchor_dir: Path, name: str) -> Path:
        """Directory of a neighbouring module, which must exist."""
        candidate = anchor_dir.parent / name
        if not self.fs.exists(candidate):
            raise MissingSiblingModuleError(name, anchor_dir)
        return candidate

    def output_path(self, module_dir: Path, package_name: str, variant: str) -> Path:
        package_dir = Path(*package_name.split("."))
        return module_dir / self.config.source_set / package_dir / module_file_name(variant)

    # -- merging -----------------------------------------------------------

    def merge_artifact(
        self,
        module_dir: Path,
        package_name: str,
        variant: str,
        style: Style | None,
        desired: list[Binding],
    ) -> MergeResult:
        """Read, merge and write one DI module; a None style skips the merge.

        Raises:
            MalformedExistingArtifactError: If the current file cannot be merged safely.
        """
        out = self.output_path(module_dir, package_name, variant)
        if style is None:
            return MergeResult(MergeStatus.SKIPPED, out, "")

        skeleton = self.templates.skeleton_for(style, variant)
        existing = parse(self.fs.read_text(out), style, out)
        result = merge(existing, desired, style, package_name, skeleton)
        return self.writer.write(out, result)

    def _binding(
        self,
        style: Style,
        interface_fqn: str,
        implementation_fqn: str,
        param_name: str,
    ) -> Binding:
        if style is Style.ANNOTATION_BINDING:
            return annotation_binding(interface_fqn, implementation_fqn, param_name)
        return dsl_binding(interface_fqn, implementation_fqn)

    def _skipped(self) -> MergeResult:
        return MergeResult(MergeStatus.SKIPPED, None, "")

    # -- artifacts ---------------------------------------------------------

    def wire_repository(self, data_dir: Path, class_name: str) -> MergeResult:
        """Bind ``<domain>.repository.<Name>`` to ``<data>.repository.<Name>Impl``."""
        style = self.style
        if style is None:
            return self._skipped()

        data_pkg = truncate_at(self.module_package(data_dir), ".data")
        domain_dir = self.sibling_module(data_dir, "domain")
        domain_pkg = truncate_at(self.module_package(domain_dir), ".domain")
        di_dir = self.sibling_module(data_dir, "di")
        di_pkg = truncate_at(self.module_package(di_dir), ".di")

        binding = self._binding(
            style,
            f"{domain_pkg}.repository.{class_name}",
            f"{data_pkg}.repository.{class_name}Impl",
            "repositoryImpl",
        )
        return self.merge_artifact(di_dir, di_pkg, "repository", style, [binding])

    def wire_datasources(
        self,
        data_dir: Path,
        repository_name: str,
        kinds: Iterable[DataSourceKind],
    ) -> MergeResult:
        """Bind each data source interface (data module) to its sibling-module impl."""
        style = self.style
        selected = list(dict.fromkeys(kinds))
        if style is None or not selected:
            return self._skipped()

        data_pkg = truncate_at(self.module_package(data_dir), ".data")
        base_name = strip_repository_suffix(repository_name)

        bindings: list[Binding] = []
        for kind in selected:
            class_name = base_name + kind.class_suffix
            impl_dir = self.sibling_module(data_dir, kind.module_name)
            impl_pkg = self.module_package(impl_dir)
            bindings.append(
                self._binding(
                    style,
                    f"{data_pkg}.{kind.module_name}.{class_name}",
                    f"{impl_pkg}.{class_name}Impl",
                    "dataSourceImpl",
                )
            )

        di_dir = self.sibling_module(data_dir, "di")
        di_pkg = truncate_at(self.module_package(di_dir), ".di")
        return self.merge_artifact(di_dir, di_pkg, "datasource", style, sort_bindings(bindings))

    def wire_usecase(
        self,
        domain_dir: Path,
        use_case_name: str,
        repositories: Iterable[str] = (),
    ) -> MergeResult:
        """Register a use case in the Koin ``UseCaseModule``.

        Hilt use cases rely on ``@Inject`` constructors, so only the Koin DSL
        convention produces a module; other conventions report SKIPPED.
        """
        if self.style is not Style.DSL_REGISTRATION:
            return self._skipped()

        domain_pkg = truncate_at(self.module_package(domain_dir), ".domain")
        use_case_fqn = f"{domain_pkg}.usecase.{use_case_name}"
        repository_fqns = [
            repo if "." in repo else f"{domain_pkg}.repository.{repo}"
            for repo in repositories
        ]

        di_dir = self.sibling_module(domain_dir, "di")
        di_pkg = truncate_at(self.module_package(di_dir), ".di")
        binding = dsl_factory_binding(use_case_fqn, repository_fqns)
        return self.merge_artifact(di_dir, di_pkg, "usecase", Style.DSL_REGISTRATION, [binding])
