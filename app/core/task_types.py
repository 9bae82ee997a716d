"""Task and result data contracts shared by the decomposer and dispatcher.

Architectural role:
    Defines the minimal schema produced by goal decomposition and consumed by the
    dispatcher and HTTP adapter.

Wire format:
    Subtasks and execution results serialize to the camelCase JSON shapes used on
    the HTTP surface (`taskId`, `taskName`, `taskType`, `result`, `data`, `error`).

Determinism:
    The data classes are purely structural and state-free.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar


T = TypeVar("T")


class TaskType(str, Enum):
    """Closed set of task types controlling which handler runs a subtask."""

    FETCH_DATA = "fetchData"
    PROCESS_DATA = "processData"
    ANALYZE_DATA = "analyzeData"
    GENERATE_REPORT = "generateReport"


class Outcome(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


@dataclass(frozen=True)
class Subtask:
    """One decomposed unit of work.

    Attributes:
        task_id: Sequential identifier (`task-1`, `task-2`, ...).
        name: LLM-generated subtask text.
        task_type: Task type value. Kept as a plain string because subtasks
            submitted over HTTP may carry types outside `TaskType`.
    """

    task_id: str
    name: str
    task_type: str

    def to_dict(self) -> dict:
        return {
            "taskId": self.task_id,
            "taskName": self.name,
            "taskType": self.task_type,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "Subtask":
        """Build a subtask from its wire form; missing keys become empty strings."""
        return cls(
            task_id=str(raw.get("taskId", "")),
            name=str(raw.get("taskName", "")),
            task_type=str(raw.get("taskType", "")),
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of dispatching a single subtask."""

    outcome: Outcome
    data: Any = None
    error: str | None = None

    @classmethod
    def success(cls, data: Any) -> "ExecutionResult":
        return cls(outcome=Outcome.SUCCESS, data=data)

    @classmethod
    def failed(cls, error: str) -> "ExecutionResult":
        return cls(outcome=Outcome.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def to_dict(self) -> dict:
        if self.ok:
            return {"result": self.outcome.value, "data": self.data}
        return {"result": self.outcome.value, "error": self.error}


# =========================================================
# TAGGED RESULT
# =========================================================

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: str
