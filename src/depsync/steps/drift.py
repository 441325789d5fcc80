"""Drift step -- compares the previous requirements.txt with the new one."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from loguru import logger

from ..models import DriftStatus, Step, StepResult, StepStatus

if TYPE_CHECKING:
    from . import SyncContext

log = logger.bind(step="drift")


def line_changes(old: str, new: str) -> tuple[list[str], list[str]]:
    """Return (added, removed) lines between two requirements texts."""
    old_lines = old.splitlines()
    new_lines = new.splitlines()
    added: list[str] = []
    removed: list[str] = []
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "delete"):
            removed.extend(old_lines[i1:i2])
        if tag in ("replace", "insert"):
            added.extend(new_lines[j1:j2])
    return added, removed


def run(ctx: SyncContext) -> StepResult:
    current = ctx.config.requirements_path
    backup = ctx.backup_path

    if backup is None or not backup.is_file():
        ctx.report.drift = DriftStatus.NO_BASELINE
        return StepResult(Step.DRIFT, StepStatus.SKIPPED, "No previous requirements to compare")

    old = backup.read_bytes()
    new = current.read_bytes()
    if old == new:
        ctx.report.drift = DriftStatus.UNCHANGED
        return StepResult(
            Step.DRIFT, StepStatus.OK, f"{current.name} is up to date", str(current)
        )

    ctx.report.drift = DriftStatus.CHANGED
    added, removed = line_changes(
        old.decode("utf-8", errors="replace"), new.decode("utf-8", errors="replace")
    )
    for line in removed:
        log.info(f"- {line}")
    for line in added:
        log.info(f"+ {line}")
    return StepResult(
        Step.DRIFT,
        StepStatus.OK,
        f"{current.name} changed since last sync (+{len(added)} -{len(removed)} lines)",
        str(current),
    )
