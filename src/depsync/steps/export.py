"""Export steps -- production and development requirement lists from uv.lock."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..artifacts import atomic_write_text
from ..models import Step, StepResult, StepStatus
from ..requirements import count_requirements, strip_editable_self

if TYPE_CHECKING:
    from . import SyncContext

log = logger.bind(step="export")


def render_production(ctx: SyncContext) -> str:
    """Exported production requirements with editable self-installs removed.

    Shared with `depsync check`, which compares this against the committed file.
    """
    return strip_editable_self(ctx.resolver.export(only_dev=False))


def run_production(ctx: SyncContext) -> StepResult:
    """Write requirements.txt. Any failure here aborts the sync."""
    path = ctx.config.requirements_path
    content = render_production(ctx)
    atomic_write_text(path, content)

    count = count_requirements(content)
    log.info(f"Wrote {path.name} ({count} packages)")
    return StepResult(
        Step.EXPORT_PROD, StepStatus.OK, f"{count} packages", str(path)
    )


def run_development(ctx: SyncContext) -> StepResult:
    path = ctx.config.dev_requirements_path
    content = strip_editable_self(ctx.resolver.export(only_dev=True))
    atomic_write_text(path, content)

    count = count_requirements(content)
    log.info(f"Wrote {path.name} ({count} packages)")
    return StepResult(Step.EXPORT_DEV, StepStatus.OK, f"{count} packages", str(path))
