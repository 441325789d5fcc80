"""Development environment bootstrap (mise runtime + uv venv + pre-commit)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..errors import DepsyncError, ExternalToolError
from ..preconditions import check_project
from ..runner import SyncRunner, print_summary
from ..runtime import MiseRuntime

if TYPE_CHECKING:
    from ..config import SyncConfig
    from ..resolver import UvResolver

log = logger.bind(step="setup")


@dataclass
class SetupReport:
    python: str = ""
    venv_created: bool = False
    synced: bool = False
    hooks_installed: bool = False
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        log.warning(message)
        click.secho(f"  WARN {message}", fg="yellow")
        self.warnings.append(message)


def _setup_runtime(runtime: MiseRuntime, report: SetupReport) -> None:
    if not runtime.available():
        report.warn(f"{runtime.bin} not found, using the current Python")
        return
    try:
        runtime.install_python()
        report.python = runtime.where_python()
    except ExternalToolError as e:
        report.warn(f"mise Python setup failed: {e}")
        return
    click.secho(f"  OK   mise Python environment ready: {report.python}", fg="green")


def _setup_venv(config: SyncConfig, resolver: UvResolver, report: SetupReport) -> None:
    if not config.venv_path.is_dir():
        resolver.create_venv(config.venv_path)
        report.venv_created = True
        click.secho(f"  OK   Created {config.venv_path.name}", fg="green")

    try:
        resolver.pip_install_editable(config.dev_extra or None)
    except ExternalToolError as e:
        report.warn(f"Editable install failed, continuing: {e}")
        return
    click.secho("  OK   Installed development dependencies", fg="green")


def _install_hooks(resolver: UvResolver, runtime: MiseRuntime, report: SetupReport) -> None:
    if resolver.available():
        probe = resolver.run(["run", "pre-commit", "--version"], check=False)
        if probe.returncode == 0:
            resolver.run(["run", "pre-commit", "install"])
            report.hooks_installed = True
            click.secho("  OK   Pre-commit hooks installed", fg="green")
            return

    if runtime.available():
        probe = runtime.exec(["pre-commit", "--version"], check=False)
        if probe.returncode == 0:
            runtime.exec(["pre-commit", "install"])
            report.hooks_installed = True
            click.secho("  OK   Pre-commit hooks installed via mise", fg="green")
            return

    log.debug("pre-commit not available, skipping hooks")


def setup_environment(
    config: SyncConfig,
    resolver: UvResolver,
    runtime: MiseRuntime | None = None,
) -> SetupReport:
    """Bootstrap a development environment for the project.

    Only a missing or unreadable manifest is fatal (PreconditionError).
    Everything else is best-effort and collected as warnings.
    """
    check_project(config)
    runtime = runtime or MiseRuntime(config)
    report = SetupReport()

    click.echo(f"Setting up development environment in {config.project_root}")
    _setup_runtime(runtime, report)

    if resolver.available():
        click.echo(f"  uv is available: {resolver.version()}")
        try:
            _setup_venv(config, resolver, report)
        except ExternalToolError as e:
            report.warn(f"uv environment setup failed: {e}")

        click.echo("Generating production requirements...")
        try:
            sync_report = SyncRunner(config, resolver=resolver).run()
        except DepsyncError as e:
            report.warn(f"Sync failed, continuing anyway: {e}")
        else:
            print_summary(sync_report, config)
            report.synced = sync_report.ok
            if not sync_report.ok:
                report.warn("Sync failed, continuing anyway")
    else:
        report.warn(
            f"{resolver.bin} not available. Install it for dependency management: "
            "curl -LsSf https://astral.sh/uv/install.sh | sh"
        )

    try:
        _install_hooks(resolver, runtime, report)
    except ExternalToolError as e:
        report.warn(f"pre-commit install failed: {e}")

    return report


def print_next_steps(report: SetupReport) -> None:
    click.echo("")
    if report.warnings:
        click.secho(
            f"Development setup finished with {len(report.warnings)} warning(s)",
            fg="yellow",
        )
    else:
        click.secho("Development environment setup complete", fg="green")
    click.echo("")
    click.echo("Next steps:")
    click.echo("  depsync add <package>      # Add a dependency")
    click.echo("  depsync add-dev <package>  # Add a development dependency")
    click.echo("  depsync sync               # Update production requirements")
    click.echo("  uv run pytest              # Run tests")
