"""Exception hierarchy for depsync."""

from .models import STEP_SEVERITY, Severity, Step


class DepsyncError(Exception):
    """Base exception for all depsync errors."""


class ConfigError(DepsyncError):
    """Invalid or missing configuration."""


class PreconditionError(DepsyncError):
    """The project or toolchain is not in a state where a command can run."""


class StepError(DepsyncError):
    """A sync step failed."""

    def __init__(self, message: str, step: Step) -> None:
        super().__init__(message)
        self.step = step
        self.severity = STEP_SEVERITY[step]

    @property
    def fatal(self) -> bool:
        return self.severity == Severity.FATAL


class ExternalToolError(DepsyncError):
    """An external subprocess (uv, mise, etc.) failed."""

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        super().__init__(f"{tool} exited with code {exit_code}: {stderr.strip()}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr
