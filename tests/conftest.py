"""Shared fixtures: a temp project root and a uv stand-in that never spawns processes."""

from pathlib import Path

import pytest
from loguru import logger

from depsync.config import SyncConfig
from depsync.errors import ExternalToolError
from depsync.resolver import UvResolver

PYPROJECT = """\
[project]
name = "demo"
version = "0.1.0"
dependencies = ["requests>=2.28.0"]

[dependency-groups]
dev = ["pytest-mock"]
"""

PROD_EXPORT = """\
# This file was autogenerated by uv via the following command:
#    uv export --format requirements-txt --no-dev
-e .
certifi==2024.2.2 \\
    --hash=sha256:0569859f95fc761b18b45ef421b1290a0f65f147e92a1e5eb3e635f9a5e4e66f
requests==2.31.0 \\
    --hash=sha256:58cd2187c01e70e6e26505bca751777aa9f2ee0b7f4300988b709f44e013003f
"""

DEV_EXPORT = """\
# This file was autogenerated by uv via the following command:
#    uv export --format requirements-txt --only-dev
pytest-mock==3.12.0 \\
    --hash=sha256:31a40f038c22cad32287bb43932054451ff5583ff094bca6f675df2f8bc1a6e9
"""

TREE = """\
demo v0.1.0
└── requests v2.31.0
    └── certifi v2024.2.2
"""

_CONFIG_ENV_VARS = [
    "DEPSYNC_PROJECT_ROOT", "DEPSYNC_UV_BIN", "DEPSYNC_MISE_BIN",
    "DEPSYNC_DEV_GROUP", "DEPSYNC_DEV_EXTRA", "DEPSYNC_EXPORT_HASHES",
    "DEPSYNC_INSTALL_CHECK", "DEPSYNC_VERBOSE", "DEPSYNC_LOG_LEVEL",
    "DEPSYNC_LOG_DIR", "DEPSYNC_REQUIREMENTS_NAME",
]


class FakeResolver(UvResolver):
    """UvResolver with canned outputs. `fail` names operations that should error."""

    def __init__(
        self,
        config: SyncConfig,
        prod: str = PROD_EXPORT,
        dev: str = DEV_EXPORT,
        tree: str = TREE,
        fail: set[str] | None = None,
        present: bool = True,
    ) -> None:
        super().__init__(config)
        self.prod = prod
        self.dev = dev
        self.tree_text = tree
        self.fail = fail or set()
        self.present = present
        self.calls: list[str] = []

    def _maybe_fail(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail:
            raise ExternalToolError(tool=f"uv {op}", exit_code=2, stderr=f"{op} broke")

    def available(self) -> bool:
        return self.present

    def lock(self) -> None:
        self._maybe_fail("lock")
        self.config.lockfile_path.write_text("version = 1\n")

    def export(self, only_dev: bool = False) -> str:
        self._maybe_fail("export-dev" if only_dev else "export-prod")
        return self.dev if only_dev else self.prod

    def tree(self) -> str:
        self._maybe_fail("tree")
        return self.tree_text

    def create_venv(self, path: Path) -> None:
        self._maybe_fail("venv")
        path.mkdir(parents=True)

    def pip_install(self, python: Path, requirements: Path, dry_run: bool = False) -> None:
        self._maybe_fail("pip-install")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove depsync env vars so tests see actual defaults."""
    for var in _CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _quiet_logger():
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def project(tmp_path) -> Path:
    """A project root containing a pyproject.toml and a uv.lock."""
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    (tmp_path / "uv.lock").write_text("version = 1\n")
    return tmp_path


@pytest.fixture
def config(project) -> SyncConfig:
    return SyncConfig(_env_file=None, project_root=project)


@pytest.fixture
def make_resolver(config):
    def _make(**kwargs) -> FakeResolver:
        return FakeResolver(kwargs.pop("config", config), **kwargs)

    return _make
