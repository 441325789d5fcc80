"""Tests for the drift step."""

from depsync.models import DriftStatus, StepStatus
from depsync.steps import SyncContext
from depsync.steps.drift import line_changes, run


class TestLineChanges:
    def test_version_bump(self):
        added, removed = line_changes("pkgA==1.0.0\n", "pkgA==1.1.0\n")
        assert added == ["pkgA==1.1.0"]
        assert removed == ["pkgA==1.0.0"]

    def test_option_lines_are_counted(self):
        added, removed = line_changes("--index-url a\nx\n", "x\n")
        assert removed == ["--index-url a"]
        assert added == []


class TestDriftStep:
    def _ctx(self, config, resolver, old, new):
        backup = config.backup_path
        backup.write_text(old)
        config.requirements_path.write_text(new)
        return SyncContext(config=config, resolver=resolver, backup_path=backup)

    def test_changed(self, config, make_resolver):
        ctx = self._ctx(config, make_resolver(), "pkgA==1.0.0\n", "pkgA==1.1.0\n")
        result = run(ctx)
        assert result.status == StepStatus.OK
        assert ctx.report.drift == DriftStatus.CHANGED
        assert "changed since last sync" in result.message

    def test_unchanged(self, config, make_resolver):
        ctx = self._ctx(config, make_resolver(), "pkgA==1.0.0\n", "pkgA==1.0.0\n")
        result = run(ctx)
        assert ctx.report.drift == DriftStatus.UNCHANGED
        assert "up to date" in result.message

    def test_byte_level_comparison(self, config, make_resolver):
        ctx = self._ctx(config, make_resolver(), "pkgA==1.0.0\n", "pkgA==1.0.0\r\n")
        run(ctx)
        assert ctx.report.drift == DriftStatus.CHANGED

    def test_no_baseline(self, config, make_resolver):
        ctx = SyncContext(config=config, resolver=make_resolver())
        result = run(ctx)
        assert result.status == StepStatus.SKIPPED
        assert ctx.report.drift == DriftStatus.NO_BASELINE
