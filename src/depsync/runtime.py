"""mise subprocess wrappers -- Python runtime install and exec."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

from loguru import logger

from .errors import ExternalToolError

if TYPE_CHECKING:
    from .config import SyncConfig

log = logger.bind(step="mise")


class MiseRuntime:
    """Runtime version manager for the project's Python interpreter."""

    def __init__(self, config: SyncConfig) -> None:
        self.project_root = config.project_root
        self.bin = config.mise_bin

    def available(self) -> bool:
        return shutil.which(self.bin) is not None

    def _run(self, args: list[str], check: bool = True) -> subprocess.CompletedProcess:
        cmd = [self.bin] + args
        log.debug(f"run {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd, cwd=self.project_root, capture_output=True, text=True
            )
        except FileNotFoundError as e:
            raise ExternalToolError(tool=self.bin, exit_code=127, stderr=str(e)) from e
        if check and result.returncode != 0:
            raise ExternalToolError(
                tool=f"{self.bin} {args[0]}",
                exit_code=result.returncode,
                stderr=result.stderr or "",
            )
        return result

    def install_python(self) -> None:
        """Install the project's pinned Python if absent (no-op when present)."""
        self._run(["install", "python"])

    def where_python(self) -> str:
        return self._run(["where", "python"]).stdout.strip()

    def exec(self, args: list[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a command inside the mise-activated environment."""
        return self._run(["exec", "--"] + args, check=check)
