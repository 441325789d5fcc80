"""depsync configuration via pydantic-settings (.env + DEPSYNC_* env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class SyncConfig(BaseSettings):
    """All depsync configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEPSYNC_",
        env_file=".env",
        extra="ignore",
    )

    # -- Project --
    project_root: Path = Path(".")
    manifest_name: str = "pyproject.toml"
    lockfile_name: str = "uv.lock"

    # -- Artifacts --
    requirements_name: str = "requirements.txt"
    dev_requirements_name: str = "requirements-dev.txt"
    tree_name: str = "dependency-tree.txt"
    backup_suffix: str = ".backup"

    # -- External tools --
    uv_bin: str = "uv"
    mise_bin: str = "mise"

    # -- Export --
    dev_group: str = "dev"
    dev_extra: str = "dev"
    export_hashes: bool = True

    # -- Validation --
    install_check: bool = True  # False = syntax check only (offline)

    # -- Logging --
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path | None = None

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest_name

    @property
    def lockfile_path(self) -> Path:
        return self.project_root / self.lockfile_name

    @property
    def requirements_path(self) -> Path:
        """Production requirement list."""
        return self.project_root / self.requirements_name

    @property
    def dev_requirements_path(self) -> Path:
        return self.project_root / self.dev_requirements_name

    @property
    def tree_path(self) -> Path:
        return self.project_root / self.tree_name

    @property
    def backup_path(self) -> Path:
        return self.project_root / f"{self.requirements_name}{self.backup_suffix}"

    @property
    def venv_path(self) -> Path:
        return self.project_root / ".venv"

    def setup_logging(self) -> None:
        """Configure loguru for depsync."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[step]:<12} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("step", "")
            return True

        level = "DEBUG" if self.verbose else self.log_level.upper()
        logger.add(
            sys.stderr,
            format=log_format,
            level=level,
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "depsync.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
