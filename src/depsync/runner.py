"""Sync runner -- orchestrates the production-artifact sync steps."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

import click
from loguru import logger

from .artifacts import requirements_backup
from .config import SyncConfig
from .errors import DepsyncError
from .models import (
    STEP_LABELS,
    STEP_ORDER,
    STEP_SEVERITY,
    DriftStatus,
    Severity,
    Step,
    StepResult,
    StepStatus,
    SyncReport,
)
from .preconditions import check_project, check_resolver
from .resolver import UvResolver
from .steps import SyncContext, get_step_runner

log = logger.bind(step="runner")

_STATUS_MARKERS: dict[StepStatus, tuple[str, str]] = {
    StepStatus.OK: ("OK", "green"),
    StepStatus.SKIPPED: ("SKIP", "blue"),
    StepStatus.WARNING: ("WARN", "yellow"),
    StepStatus.FAILED: ("FAIL", "red"),
}


def echo_result(result: StepResult) -> None:
    """Print one step outcome as a colored status line."""
    marker, color = _STATUS_MARKERS[result.status]
    label = STEP_LABELS[result.step]
    line = f"  {click.style(f'{marker:<4}', fg=color)} {label}"
    if result.message:
        line += f" -- {result.message}"
    click.echo(line)


class SyncRunner:
    """Runs the sync procedure for one project root."""

    def __init__(
        self,
        config: SyncConfig,
        resolver: UvResolver | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or UvResolver(config)

    def run(self) -> SyncReport:
        """Run every step in order and return the aggregated report.

        Raises PreconditionError (or ConfigError) before anything is written
        when the manifest or the resolver is missing. Only a fatal step stops
        the sequence; advisory failures become warnings.
        """
        check_project(self.config)
        check_resolver(self.resolver)

        click.echo(f"Syncing production artifacts in {self.config.project_root}")
        report = SyncReport()

        with ExitStack() as stack:
            backup_path = self._enter_backup(stack, report)

            ctx = SyncContext(
                config=self.config,
                resolver=self.resolver,
                backup_path=backup_path,
                report=report,
            )
            for step in STEP_ORDER:
                result = report.add(self._execute(step, ctx))
                echo_result(result)
                if result.fatal:
                    log.error(f"Aborting sync: {step.value} failed")
                    break

        return report

    def _enter_backup(self, stack: ExitStack, report: SyncReport) -> Path | None:
        """Hold the previous requirements.txt aside for the run.

        A failed copy is a warning: the run continues without a drift baseline.
        """
        try:
            backup_path = stack.enter_context(
                requirements_backup(self.config.requirements_path, self.config.backup_path)
            )
        except OSError as e:
            log.warning(f"backup (non-critical): {e}")
            result = report.add(
                StepResult(
                    Step.BACKUP,
                    StepStatus.WARNING,
                    f"Could not back up {self.config.requirements_name}: {e}",
                )
            )
            echo_result(result)
            return None

        if backup_path is not None:
            report.add(
                StepResult(
                    Step.BACKUP,
                    StepStatus.OK,
                    f"Saved previous {self.config.requirements_name}",
                    str(backup_path),
                )
            )
        return backup_path

    def _execute(self, step: Step, ctx: SyncContext) -> StepResult:
        """Run one step, turning raised errors into a result by severity."""
        runner = get_step_runner(step)
        log.debug(f"Running step {step.value}")
        try:
            return runner(ctx)
        except (DepsyncError, OSError) as e:
            if STEP_SEVERITY[step] == Severity.FATAL:
                log.error(f"{step.value}: {e}")
                return StepResult(step, StepStatus.FAILED, str(e))
            log.warning(f"{step.value} (non-critical): {e}")
            return StepResult(step, StepStatus.WARNING, str(e))


def print_summary(report: SyncReport, config: SyncConfig) -> None:
    """Human-readable end-of-run summary."""
    click.echo("")
    fatal = report.fatal
    if fatal is not None:
        click.secho(
            f"Sync failed at step '{fatal.step.value}': {fatal.message}",
            fg="red",
            err=True,
        )
        return

    click.echo("Production artifacts:")
    for step in (Step.EXPORT_PROD, Step.EXPORT_DEV, Step.TREE):
        result = report.get(step)
        if result is not None and result.status == StepStatus.OK and result.artifact:
            click.echo(f"  {Path(result.artifact).name:<24} {result.message}")

    if report.drift == DriftStatus.CHANGED:
        click.secho(
            f"{config.requirements_name} has changed since last sync. "
            "Review before committing: git diff " + config.requirements_name,
            fg="yellow",
        )
    elif report.drift == DriftStatus.UNCHANGED:
        click.secho(f"{config.requirements_name} is up to date", fg="green")

    if report.warnings:
        click.secho(f"Completed with {len(report.warnings)} warning(s)", fg="yellow")
    else:
        click.secho("Production sync complete", fg="green")