"""Precondition checks run before any command touches the project."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

from loguru import logger

from .errors import ConfigError, PreconditionError

if TYPE_CHECKING:
    from .config import SyncConfig
    from .resolver import UvResolver

log = logger.bind(step="preflight")

UV_INSTALL_HINT = (
    "Install with: curl -LsSf https://astral.sh/uv/install.sh | sh\n"
    "Or run 'depsync setup' after installing it."
)


def check_project(config: SyncConfig) -> dict:
    """Verify the project root holds a readable manifest. Returns the parsed manifest."""
    root = config.project_root
    if not root.is_dir():
        raise ConfigError(f"Project root is not a directory: {root}")

    manifest = config.manifest_path
    if not manifest.is_file():
        raise PreconditionError(
            f"{manifest.name} not found in {root}. Run depsync from the project root "
            f"or pass --project-root."
        )

    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise PreconditionError(f"{manifest.name} is not valid TOML: {e}") from e

    log.debug(f"Manifest OK: {manifest}")
    return data


def check_resolver(resolver: UvResolver) -> None:
    if not resolver.available():
        raise PreconditionError(f"{resolver.bin} is required but was not found on PATH.\n{UV_INSTALL_HINT}")
    log.debug(f"Resolver OK: {resolver.bin}")
