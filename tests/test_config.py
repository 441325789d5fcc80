"""Tests for config.py -- defaults, env var overrides, derived paths."""

from pathlib import Path

from depsync.config import SyncConfig


class TestDefaults:
    def test_default_values(self):
        config = SyncConfig(_env_file=None)
        assert config.uv_bin == "uv"
        assert config.mise_bin == "mise"
        assert config.dev_group == "dev"
        assert config.export_hashes is True
        assert config.install_check is True
        assert config.verbose is False
        assert config.log_level == "INFO"
        assert config.log_dir is None

    def test_default_artifact_names(self):
        config = SyncConfig(_env_file=None)
        assert config.requirements_name == "requirements.txt"
        assert config.dev_requirements_name == "requirements-dev.txt"
        assert config.tree_name == "dependency-tree.txt"
        assert config.backup_suffix == ".backup"


class TestOverrides:
    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("DEPSYNC_UV_BIN", "/opt/uv/bin/uv")
        monkeypatch.setenv("DEPSYNC_EXPORT_HASHES", "false")
        monkeypatch.setenv("DEPSYNC_DEV_GROUP", "test")
        config = SyncConfig(_env_file=None)
        assert config.uv_bin == "/opt/uv/bin/uv"
        assert config.export_hashes is False
        assert config.dev_group == "test"

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("UV_BIN", "/nope")
        config = SyncConfig(_env_file=None)
        assert config.uv_bin == "uv"

    def test_kwargs_beat_env(self, monkeypatch):
        monkeypatch.setenv("DEPSYNC_INSTALL_CHECK", "true")
        config = SyncConfig(_env_file=None, install_check=False)
        assert config.install_check is False

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("DEPSYNC_REQUIREMENTS_NAME=reqs.txt\n")
        config = SyncConfig(_env_file=env)
        assert config.requirements_name == "reqs.txt"


class TestPaths:
    def test_artifact_paths(self, tmp_path):
        config = SyncConfig(_env_file=None, project_root=tmp_path)
        assert config.manifest_path == tmp_path / "pyproject.toml"
        assert config.lockfile_path == tmp_path / "uv.lock"
        assert config.requirements_path == tmp_path / "requirements.txt"
        assert config.dev_requirements_path == tmp_path / "requirements-dev.txt"
        assert config.tree_path == tmp_path / "dependency-tree.txt"
        assert config.venv_path == tmp_path / ".venv"

    def test_backup_sits_beside_requirements(self, tmp_path):
        config = SyncConfig(
            _env_file=None, project_root=tmp_path, requirements_name="reqs.txt"
        )
        assert config.backup_path == tmp_path / "reqs.txt.backup"

    def test_relative_root(self):
        config = SyncConfig(_env_file=None)
        assert config.requirements_path == Path(".") / "requirements.txt"
