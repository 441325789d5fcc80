"""Step registry -- maps Step enum values to run functions.

Sync order: lock -> export-prod -> export-dev -> tree -> validate -> drift

The backup of the previous requirements.txt is not a step: the runner holds
it as a scoped resource around the whole sequence so it is removed on every
exit path.

Steps:
    lock        -- Run `uv lock` when uv.lock is missing. Skipped otherwise.
                   The only step allowed to create the lockfile.
    export-prod -- `uv export --no-dev` (or --no-group), strip editable
                   self-install lines, atomic write of requirements.txt.
                   Fatal on failure.
    export-dev  -- `uv export --only-dev` into requirements-dev.txt. Advisory.
    tree        -- `uv tree` into dependency-tree.txt. Advisory.
    validate    -- Dry-run install of requirements.txt into a disposable venv,
                   falling back to a syntactic check. Advisory.
    drift       -- Byte comparison of the backup against the new
                   requirements.txt. Informational, never fails the run.

Every run function takes a SyncContext and returns a StepResult. External
tool failures are raised as ExternalToolError and converted by the runner.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..models import Step, StepResult, SyncReport

if TYPE_CHECKING:
    from ..config import SyncConfig
    from ..resolver import UvResolver


@dataclass
class SyncContext:
    """State shared by the steps of one sync run."""

    config: SyncConfig
    resolver: UvResolver
    backup_path: Path | None = None
    report: SyncReport = field(default_factory=SyncReport)


StepRunner = Callable[[SyncContext], StepResult]


def get_step_runner(step: Step) -> StepRunner:
    """Return the run function for a given step."""
    if step == Step.LOCK:
        from .lock import run as lock_run

        return lock_run

    if step == Step.EXPORT_PROD:
        from .export import run_production

        return run_production

    if step == Step.EXPORT_DEV:
        from .export import run_development

        return run_development

    if step == Step.TREE:
        from .tree import run as tree_run

        return tree_run

    if step == Step.VALIDATE:
        from .validate import run as validate_run

        return validate_run

    if step == Step.DRIFT:
        from .drift import run as drift_run

        return drift_run

    raise NotImplementedError(f"Step '{step.value}' has no run function")
