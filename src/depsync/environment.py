"""Disposable virtual environments for install validation."""

from __future__ import annotations

import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .resolver import UvResolver

log = logger.bind(step="validate")


class DisposableEnvironment:
    """A uv-created venv living inside a temporary directory."""

    def __init__(self, resolver: UvResolver, path: Path) -> None:
        self.resolver = resolver
        self.path = path

    @property
    def python(self) -> Path:
        if sys.platform == "win32":
            return self.path / "Scripts" / "python.exe"
        return self.path / "bin" / "python"

    def install(self, requirements: Path, dry_run: bool = True) -> None:
        """Install requirements into this environment. Raises ExternalToolError."""
        self.resolver.pip_install(self.python, requirements, dry_run=dry_run)


@contextmanager
def disposable_environment(resolver: UvResolver) -> Iterator[DisposableEnvironment]:
    """Create a throwaway venv; it is removed on every exit path.

    Creation failures propagate (after the temp dir is removed) so callers can
    fall back to syntax-only validation.
    """
    with tempfile.TemporaryDirectory(prefix="depsync-venv-") as tmp:
        path = Path(tmp) / "venv"
        log.debug(f"Creating disposable environment at {path}")
        resolver.create_venv(path)
        try:
            yield DisposableEnvironment(resolver, path)
        finally:
            log.debug(f"Discarding disposable environment at {path}")
