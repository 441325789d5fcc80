"""Tree step -- snapshot of `uv tree` for documentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..artifacts import atomic_write_text
from ..models import Step, StepResult, StepStatus

if TYPE_CHECKING:
    from . import SyncContext


def run(ctx: SyncContext) -> StepResult:
    path = ctx.config.tree_path
    atomic_write_text(path, ctx.resolver.tree())
    return StepResult(Step.TREE, StepStatus.OK, "Dependency tree documentation", str(path))
