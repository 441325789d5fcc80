"""Artifact file handling -- atomic writes and the scoped requirements backup."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

log = logger.bind(step="backup")


def atomic_write_text(path: Path, content: str) -> None:
    """Write content to path via a sibling temp file and an atomic replace.

    Readers see either the old file or the complete new one. The temp file
    is removed if anything fails before the replace.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _discard(backup: Path) -> None:
    try:
        backup.unlink(missing_ok=True)
    except OSError as e:
        log.warning(f"Could not remove {backup.name}: {e}")
        return
    log.debug(f"Removed {backup.name}")


@contextmanager
def requirements_backup(source: Path, backup: Path) -> Iterator[Path | None]:
    """Copy source aside for the duration of the block.

    Yields the backup path, or None when there was nothing to back up. The
    backup is deleted on every exit path, including exceptions and
    KeyboardInterrupt. A failed copy raises OSError after removing any partial
    backup; a failed removal is logged.
    """
    if not source.is_file():
        log.debug(f"No existing {source.name} to back up")
        try:
            yield None
        finally:
            # A stale backup from an interrupted earlier run must not survive either
            _discard(backup)
        return

    try:
        shutil.copy2(source, backup)
    except OSError:
        _discard(backup)
        raise
    log.debug(f"Backed up {source.name} to {backup.name}")
    try:
        yield backup
    finally:
        _discard(backup)
