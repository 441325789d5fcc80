"""Dependency health check -- conflicts and production requirements drift."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..steps import SyncContext
from ..steps.export import render_production

if TYPE_CHECKING:
    from ..config import SyncConfig
    from ..resolver import UvResolver

log = logger.bind(step="check")


@dataclass
class CheckReport:
    """Result of `depsync check`.

    in_sync is None when there is no lockfile or requirements.txt to compare.
    """

    conflicts: bool
    conflict_output: str = ""
    in_sync: bool | None = None


def check_dependencies(config: SyncConfig, resolver: UvResolver) -> CheckReport:
    """Check for installed-package conflicts and stale production requirements."""
    click.echo("Checking for dependency conflicts...")
    result = resolver.pip_check()
    conflicts = result.returncode != 0
    output = (result.stdout or "") + (result.stderr or "")
    if conflicts:
        click.secho("Dependency conflicts detected:", fg="yellow")
        click.echo(output.rstrip())
    else:
        click.secho("No dependency conflicts found", fg="green")

    report = CheckReport(conflicts=conflicts, conflict_output=output)

    if not (config.lockfile_path.is_file() and config.requirements_path.is_file()):
        click.secho(
            "No lockfile or requirements found. Run 'depsync sync' to generate.",
            fg="yellow",
        )
        return report

    click.echo("Checking if production sync is needed...")
    fresh = render_production(SyncContext(config=config, resolver=resolver))
    committed = config.requirements_path.read_text(encoding="utf-8")
    report.in_sync = fresh == committed
    log.debug(f"in_sync={report.in_sync}")

    if report.in_sync:
        click.secho("Production requirements are up to date", fg="green")
    else:
        click.secho(
            "Production requirements are out of sync. Run 'depsync sync' to update.",
            fg="yellow",
        )
    return report
