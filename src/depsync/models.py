"""Core enums, constants, and result types for depsync.

Enums:
    Step        -- Individual sync step (lock through drift).
    StepStatus  -- Step outcome (ok, skipped, warning, failed).
    Severity    -- How a step failure affects the run (fatal, advisory).
    DriftStatus -- Outcome of comparing the old and new production lists.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class Step(StrEnum):
    LOCK = "lock"
    BACKUP = "backup"
    EXPORT_PROD = "export-prod"
    EXPORT_DEV = "export-dev"
    TREE = "tree"
    VALIDATE = "validate"
    DRIFT = "drift"


class StepStatus(StrEnum):
    OK = "ok"
    SKIPPED = "skipped"
    WARNING = "warning"
    FAILED = "failed"


class Severity(StrEnum):
    FATAL = "fatal"
    ADVISORY = "advisory"


class DriftStatus(StrEnum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    NO_BASELINE = "no-baseline"


# Backup is not in this list -- it is a scoped resource held by the runner
STEP_ORDER: list[Step] = [
    Step.LOCK,
    Step.EXPORT_PROD,
    Step.EXPORT_DEV,
    Step.TREE,
    Step.VALIDATE,
    Step.DRIFT,
]

STEP_SEVERITY: dict[Step, Severity] = {
    Step.LOCK: Severity.FATAL,
    Step.BACKUP: Severity.ADVISORY,
    Step.EXPORT_PROD: Severity.FATAL,
    Step.EXPORT_DEV: Severity.ADVISORY,
    Step.TREE: Severity.ADVISORY,
    Step.VALIDATE: Severity.ADVISORY,
    Step.DRIFT: Severity.ADVISORY,
}

STEP_LABELS: dict[Step, str] = {
    Step.LOCK: "Lockfile",
    Step.BACKUP: "Backup",
    Step.EXPORT_PROD: "Production requirements",
    Step.EXPORT_DEV: "Development requirements",
    Step.TREE: "Dependency tree",
    Step.VALIDATE: "Pip compatibility",
    Step.DRIFT: "Drift check",
}

VERSION_OPERATORS: tuple[str, ...] = ("==", ">=", "<=", ">", "<")


@dataclass
class StepResult:
    """Outcome of a single sync step."""

    step: Step
    status: StepStatus
    message: str = ""
    artifact: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == StepStatus.FAILED

    @property
    def fatal(self) -> bool:
        return self.failed and STEP_SEVERITY[self.step] == Severity.FATAL


@dataclass
class InvalidLine:
    """A requirements line rejected by the syntactic validator."""

    lineno: int
    text: str
    reason: str


@dataclass
class SyncReport:
    """Aggregated outcome of one sync run."""

    results: list[StepResult] = field(default_factory=list)
    drift: DriftStatus | None = None

    def add(self, result: StepResult) -> StepResult:
        self.results.append(result)
        return result

    def get(self, step: Step) -> StepResult | None:
        for result in self.results:
            if result.step == step:
                return result
        return None

    @property
    def fatal(self) -> StepResult | None:
        """The fatal result that aborted the run, if any."""
        for result in self.results:
            if result.fatal:
                return result
        return None

    @property
    def warnings(self) -> list[StepResult]:
        return [r for r in self.results if r.status == StepStatus.WARNING]

    @property
    def ok(self) -> bool:
        return self.fatal is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
