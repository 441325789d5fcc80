"""Tests for environment.py -- disposable venv lifecycle."""

from pathlib import Path

import pytest

from depsync.environment import disposable_environment
from depsync.errors import ExternalToolError


class TestDisposableEnvironment:
    def test_removed_after_use(self, make_resolver):
        resolver = make_resolver()
        with disposable_environment(resolver) as env:
            created = env.path
            assert created.is_dir()
        assert not created.exists()
        assert not created.parent.exists()

    def test_removed_on_install_failure(self, make_resolver):
        resolver = make_resolver(fail={"pip-install"})
        created: Path | None = None
        with pytest.raises(ExternalToolError):
            with disposable_environment(resolver) as env:
                created = env.path
                env.install(Path("requirements.txt"))
        assert created is not None
        assert not created.parent.exists()

    def test_creation_failure_propagates(self, make_resolver):
        resolver = make_resolver(fail={"venv"})
        with pytest.raises(ExternalToolError, match="venv broke"):
            with disposable_environment(resolver):
                pass

    def test_removed_on_interrupt(self, make_resolver):
        resolver = make_resolver()
        with pytest.raises(KeyboardInterrupt):
            with disposable_environment(resolver) as env:
                created = env.path
                raise KeyboardInterrupt
        assert not created.parent.exists()

    def test_python_path_inside_env(self, make_resolver):
        with disposable_environment(make_resolver()) as env:
            assert env.python.is_relative_to(env.path)
            assert env.python.name.startswith("python")
