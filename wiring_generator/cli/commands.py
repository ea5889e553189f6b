#!/usr/bin/env python3
"""DI Wiring CLI - Main Entry Point.

Usage:
    wiring <command> [options]

Commands:
    repository          Bind a repository interface to its Impl in RepositoryModule
    datasource          Bind data sources of a repository in DataSourceModule
    usecase             Register a use case in UseCaseModule (Koin)
    infer-package       Print the package a module's generated code belongs to
    list-repositories   List repository interfaces of a domain module
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import click

from wiring_generator.core.errors import ConfigError, WiringError
from wiring_generator.core.models import MergeResult
from wiring_generator.core.package_resolver import (
    find_module_package,
    infer_presentation_package,
    resolve,
)
from wiring_generator.core.source_scanner import find_repositories, scan_packages
from wiring_generator.core.wiring import (
    DataSourceKind,
    WiringGenerator,
    run_batch,
)
from wiring_generator.helpers.file_system import LocalFileSystem
from wiring_generator.helpers.helpers_logging import (
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from wiring_generator.helpers.project_config import (
    DiConvention,
    WiringConfig,
    get_project_root,
    load_wiring_config,
)
from wiring_generator.scaffolding.templates import TemplateProvider

_DI_CHOICES = [convention.value for convention in DiConvention]

_di_option = click.option(
    "--di",
    type=click.Choice(_DI_CHOICES),
    default=None,
    help="DI convention (overrides wiring.yaml)",
)

_module_dir = click.Path(exists=True, file_okay=False, path_type=Path)


def _load_config(anchor: Path, di: str | None) -> WiringConfig:
    """Load wiring.yaml of the project containing anchor, applying --di."""
    try:
        config = load_wiring_config(get_project_root(anchor))
        return config.with_convention(di)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _build_generator(anchor: Path, di: str | None) -> WiringGenerator:
    return WiringGenerator(LocalFileSystem(), TemplateProvider(), _load_config(anchor, di))


def _run_steps(title: str, steps: list[tuple[str, Callable[[], MergeResult]]]) -> int:
    print_header(title)
    report = run_batch(steps)
    if report.failed:
        print_error("Some artifacts could not be generated")
        return 1
    print_success("Wiring is up to date")
    return 0


@click.group()
def _click_cli() -> None:
    """Generate and merge DI wiring modules for a layered Kotlin project."""


@_click_cli.command(name="repository", help="Wire a repository in RepositoryModule")
@click.argument("data_dir", type=_module_dir)
@click.argument("name")
@_di_option
def repository_cmd(data_dir: Path, name: str, di: str | None) -> int:
    generator = _build_generator(data_dir, di)
    return _run_steps(
        f"Wiring repository {name}",
        [("RepositoryModule", lambda: generator.wire_repository(data_dir, name))],
    )


@_click_cli.command(name="datasource", help="Wire data sources in DataSourceModule")
@click.argument("data_dir", type=_module_dir)
@click.argument("repository_name")
@click.option("--combined", is_flag=True, help="Single DataSource (default)")
@click.option("--remote", is_flag=True, help="RemoteDataSource")
@click.option("--local", is_flag=True, help="LocalDataSource")
@_di_option
def datasource_cmd(
    data_dir: Path,
    repository_name: str,
    combined: bool,
    remote: bool,
    local: bool,
    di: str | None,
) -> int:
    if combined and (remote or local):
        raise click.UsageError("--combined cannot be used with --remote/--local")

    kinds: list[DataSourceKind] = []
    if remote:
        kinds.append(DataSourceKind.REMOTE)
    if local:
        kinds.append(DataSourceKind.LOCAL)
    if not kinds:
        kinds.append(DataSourceKind.COMBINED)

    generator = _build_generator(data_dir, di)
    return _run_steps(
        f"Wiring data sources for {repository_name}",
        [
            (
                "DataSourceModule",
                lambda: generator.wire_datasources(data_dir, repository_name, kinds),
            ),
        ],
    )


@_click_cli.command(name="usecase", help="Register a use case in UseCaseModule")
@click.argument("domain_dir", type=_module_dir)
@click.argument("name")
@click.option(
    "--repository",
    "repositories",
    multiple=True,
    help="Repository the use case depends on (repeatable)",
)
@_di_option
def usecase_cmd(
    domain_dir: Path,
    name: str,
    repositories: tuple[str, ...],
    di: str | None,
) -> int:
    generator = _build_generator(domain_dir, di)
    return _run_steps(
        f"Wiring use case {name}",
        [
            (
                "UseCaseModule",
                lambda: generator.wire_usecase(domain_dir, name, repositories),
            ),
        ],
    )


@_click_cli.command(name="infer-package", help="Print the inferred package of a module")
@click.argument("module_dir", type=_module_dir)
@click.option("--role", default=None, help="Preferred layer role (data, domain, di ...)")
@click.option("--presentation", is_flag=True, help="Infer the presentation package instead")
def infer_package_cmd(module_dir: Path, role: str | None, presentation: bool) -> int:
    config = _load_config(module_dir, None)
    source_root = module_dir / config.source_set
    try:
        if presentation:
            package = infer_presentation_package(scan_packages(source_root, config.extensions))
            if package is None:
                print_error(f"No packages found under {source_root}")
                return 1
        elif role:
            package = resolve(scan_packages(source_root, config.extensions), role)
        else:
            package = find_module_package(module_dir, config.source_set, config.extensions)
    except WiringError as exc:
        print_error(str(exc))
        return 1

    click.echo(package)
    return 0


@_click_cli.command(name="list-repositories", help="List repositories of a domain module")
@click.argument("domain_dir", type=_module_dir)
def list_repositories_cmd(domain_dir: Path) -> int:
    config = _load_config(domain_dir, None)
    grouped = find_repositories(domain_dir, config.source_set, config.extensions)
    if not grouped:
        print_warning(f"No repositories found in {domain_dir}")
        return 0

    for package in sorted(grouped):
        print_info(package)
        for simple_name, _fqn in grouped[package]:
            click.echo(f"  {simple_name}")
    return 0


def main() -> int:
    """Main CLI entry point."""
    try:
        result = _click_cli.main(
            args=sys.argv[1:],
            prog_name="wiring",
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return 130
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return 0 if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
