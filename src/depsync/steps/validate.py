"""Validate step -- checks requirements.txt is installable by pip.

Tries a dry-run install into a disposable venv first. If the environment
cannot be created or the dry run fails (offline, constrained sandbox), falls
back to a syntactic check of each line. Problems are reported as warnings:
they may reflect the environment rather than a malformed artifact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..environment import disposable_environment
from ..errors import ExternalToolError
from ..models import InvalidLine, Step, StepResult, StepStatus
from ..requirements import validate_requirements_text

if TYPE_CHECKING:
    from . import SyncContext

log = logger.bind(step="validate")

_MAX_REPORTED = 3


def _dry_run_install(ctx: SyncContext) -> bool:
    """True if a dry-run install into a throwaway venv succeeded."""
    try:
        with disposable_environment(ctx.resolver) as env:
            env.install(ctx.config.requirements_path, dry_run=True)
    except ExternalToolError as e:
        log.info(f"Dry-run install unavailable, using syntax check: {e}")
        return False
    return True


def _format_invalid(invalid: list[InvalidLine]) -> str:
    shown = "; ".join(
        f"line {i.lineno}: {i.text!r} ({i.reason})" for i in invalid[:_MAX_REPORTED]
    )
    extra = len(invalid) - _MAX_REPORTED
    if extra > 0:
        shown += f"; and {extra} more"
    return f"{len(invalid)} invalid line(s): {shown}"


def run(ctx: SyncContext) -> StepResult:
    path = ctx.config.requirements_path
    if not path.is_file():
        return StepResult(Step.VALIDATE, StepStatus.WARNING, f"{path.name} not found")

    if ctx.config.install_check and _dry_run_install(ctx):
        return StepResult(
            Step.VALIDATE, StepStatus.OK, "Dry-run install passed", str(path)
        )

    invalid = validate_requirements_text(path.read_text(encoding="utf-8"))
    if invalid:
        for line in invalid:
            log.warning(f"{path.name}:{line.lineno}: {line.reason}: {line.text}")
        return StepResult(
            Step.VALIDATE, StepStatus.WARNING, _format_invalid(invalid), str(path)
        )

    return StepResult(
        Step.VALIDATE, StepStatus.OK, "Format validation passed", str(path)
    )
