"""uv subprocess wrappers -- lock, export, tree, add/remove/upgrade, pip check.

All commands run with cwd set to the project root; nothing here changes the
process working directory.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .errors import ExternalToolError

if TYPE_CHECKING:
    from .config import SyncConfig

log = logger.bind(step="uv")


class UvResolver:
    """Thin wrapper around the uv CLI for one project root."""

    def __init__(self, config: SyncConfig) -> None:
        self.config = config
        self.project_root = config.project_root
        self.bin = config.uv_bin

    def available(self) -> bool:
        return shutil.which(self.bin) is not None

    def run(
        self,
        args: list[str],
        check: bool = True,
        capture: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run a uv command. Raises ExternalToolError on non-zero exit when check is set."""
        cmd = [self.bin] + args
        log.debug(f"run {' '.join(cmd)} (cwd={self.project_root})")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.project_root,
                capture_output=capture,
                text=True,
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

    def version(self) -> str:
        return self.run(["--version"]).stdout.strip()

    # -- Lock / export --

    def lock(self) -> None:
        self.run(["lock"])

    def _group_args(self, only_dev: bool) -> list[str]:
        group = self.config.dev_group
        if group == "dev":
            return ["--only-dev"] if only_dev else ["--no-dev"]
        return ["--only-group", group] if only_dev else ["--no-group", group]

    def export(self, only_dev: bool = False) -> str:
        """Export the lockfile as requirements.txt text.

        only_dev=False excludes the development group, only_dev=True exports
        nothing but the development group.
        """
        args = ["export", "--format", "requirements-txt"]
        args += self._group_args(only_dev)
        if not self.config.export_hashes:
            args.append("--no-hashes")
        return self.run(args).stdout

    def tree(self) -> str:
        return self.run(["tree"]).stdout

    # -- Manifest edits --

    def add(self, package: str, dev: bool = False) -> None:
        args = ["add"]
        if dev:
            group = self.config.dev_group
            args += ["--dev"] if group == "dev" else ["--group", group]
        args.append(package)
        self.run(args, capture=False)

    def remove(self, package: str) -> None:
        self.run(["remove", package], capture=False)

    def upgrade(self, package: str | None = None) -> None:
        """Upgrade one package, or every locked package when package is None."""
        if package:
            self.run(["add", "--upgrade", package], capture=False)
        else:
            self.run(["sync", "--upgrade"], capture=False)

    def pip_check(self) -> subprocess.CompletedProcess:
        """Run uv pip check. Returns the result; conflicts are a non-zero exit."""
        return self.run(["pip", "check"], check=False)

    # -- Environments --

    def create_venv(self, path: Path) -> None:
        self.run(["venv", "--quiet", str(path)])

    def pip_install(
        self,
        python: Path,
        requirements: Path,
        dry_run: bool = False,
    ) -> None:
        args = ["pip", "install", "--python", str(python), "-r", str(requirements)]
        if dry_run:
            args.append("--dry-run")
        self.run(args)

    def pip_install_editable(self, extra: str | None = None) -> None:
        target = f".[{extra}]" if extra else "."
        self.run(["pip", "install", "-e", target], capture=False)
