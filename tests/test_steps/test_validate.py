"""Tests for the validate step -- dry-run install with syntactic fallback."""

from depsync.config import SyncConfig
from depsync.models import StepStatus
from depsync.steps import SyncContext
from depsync.steps.validate import run


def _ctx(config, resolver, content):
    config.requirements_path.write_text(content)
    return SyncContext(config=config, resolver=resolver)


class TestValidateStep:
    def test_dry_run_install_passes(self, config, make_resolver):
        resolver = make_resolver()
        result = run(_ctx(config, resolver, "requests==2.31.0\n"))
        assert result.status == StepStatus.OK
        assert result.message == "Dry-run install passed"
        assert resolver.calls == ["venv", "pip-install"]

    def test_falls_back_when_install_fails(self, config, make_resolver):
        resolver = make_resolver(fail={"pip-install"})
        result = run(_ctx(config, resolver, "requests==2.31.0\nweird-package-name-no-version\n"))
        assert result.status == StepStatus.OK
        assert result.message == "Format validation passed"

    def test_falls_back_when_venv_fails(self, config, make_resolver):
        resolver = make_resolver(fail={"venv"})
        result = run(_ctx(config, resolver, "bad;;version\n"))
        assert result.status == StepStatus.WARNING
        assert "1 invalid line(s)" in result.message
        assert "bad;;version" in result.message

    def test_install_check_disabled(self, project, make_resolver):
        config = SyncConfig(_env_file=None, project_root=project, install_check=False)
        resolver = make_resolver(config=config)
        result = run(_ctx(config, resolver, "requests\n"))
        assert result.status == StepStatus.OK
        assert resolver.calls == []

    def test_many_invalid_lines_truncated(self, project, make_resolver):
        config = SyncConfig(_env_file=None, project_root=project, install_check=False)
        content = "".join(f"bad{i};;x\n" for i in range(5))
        result = run(_ctx(config, make_resolver(config=config), content))
        assert result.status == StepStatus.WARNING
        assert "5 invalid line(s)" in result.message
        assert "and 2 more" in result.message

    def test_missing_requirements_warns(self, config, make_resolver):
        result = run(SyncContext(config=config, resolver=make_resolver()))
        assert result.status == StepStatus.WARNING
