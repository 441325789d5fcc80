"""Lock step -- generates uv.lock when it does not exist yet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..errors import StepError
from ..models import Step, StepResult, StepStatus

if TYPE_CHECKING:
    from . import SyncContext

log = logger.bind(step="lock")


def run(ctx: SyncContext) -> StepResult:
    lockfile = ctx.config.lockfile_path
    if lockfile.is_file():
        log.debug(f"{lockfile.name} present, not relocking")
        return StepResult(
            Step.LOCK, StepStatus.SKIPPED, f"{lockfile.name} present", str(lockfile)
        )

    log.warning(f"{lockfile.name} not found, generating")
    ctx.resolver.lock()

    if not lockfile.is_file():
        raise StepError(f"uv lock succeeded but {lockfile.name} is missing", Step.LOCK)

    return StepResult(Step.LOCK, StepStatus.OK, f"Generated {lockfile.name}", str(lockfile))
