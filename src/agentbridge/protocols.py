"""Collaborator protocols and the execution result message.

These protocols define the contract between AgentBridge and the pieces it
does not own: the Agent (remote action executor and report sink) and the
browser driver it reports on. ``AgentClient`` implements the Agent side over
HTTP; tests substitute in-memory fakes.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from agentbridge.reporting.reports import StepReport, TestReport


class ExecutionResultType(str, enum.Enum):
    PASSED = "Passed"
    FAILED = "Failed"


@dataclasses.dataclass(frozen=True)
class ResultField:
    """A single field echoed back by the Agent after an action ran."""

    name: str
    value: str | None
    is_output: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResultField:
        value = data.get("value")
        return cls(
            name=str(data.get("name", "")),
            value=None if value is None else str(value),
            is_output=bool(data.get("output", False)),
        )


@dataclasses.dataclass
class ExecutionResult:
    """Outcome of exactly one remote action execution."""

    result_type: ExecutionResultType
    message: str = ""
    fields: list[ResultField] = dataclasses.field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.result_type is ExecutionResultType.PASSED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExecutionResult:
        """Build a result from the Agent's JSON response.

        Unknown result types are treated as failures.
        """
        try:
            result_type = ExecutionResultType(data.get("resultType"))
        except ValueError:
            result_type = ExecutionResultType.FAILED
        return cls(
            result_type=result_type,
            message=data.get("message") or "",
            fields=[ResultField.from_dict(f) for f in data.get("fields") or []],
        )


@runtime_checkable
class RemoteExecutor(Protocol):
    """Runs an addon action on the Agent and returns its result.

    A ``timeout_ms`` of -1 means "use the Agent's default".
    """

    def execute_action(self, payload: dict[str, Any], timeout_ms: int) -> ExecutionResult: ...


@runtime_checkable
class AgentReporter(Protocol):
    """Report sink on the Agent. Both methods return False on failure instead of raising."""

    def report_step(self, report: StepReport) -> bool: ...

    def report_test(self, report: TestReport) -> bool: ...


@runtime_checkable
class ReportingCommands(Protocol):
    """Driver-side reporting switches plus automatic test-boundary reporting."""

    def is_reports_disabled(self) -> bool: ...

    def set_reports_disabled(self, disabled: bool) -> None: ...

    def is_command_reports_disabled(self) -> bool: ...

    def set_command_reports_disabled(self, disabled: bool) -> None: ...

    def is_test_auto_reports_disabled(self) -> bool: ...

    def set_test_auto_reports_disabled(self, disabled: bool) -> None: ...

    def is_redaction_disabled(self) -> bool: ...

    def set_redaction_disabled(self, disabled: bool) -> None: ...

    def report_test(self, frames: Sequence[Any], is_automatic: bool) -> bool: ...


@runtime_checkable
class ReportingDriver(Protocol):
    """What the Reporter needs from the driver it reports on."""

    def get_reporting_command_executor(self) -> ReportingCommands: ...

    def get_screenshot(self) -> bytes | None: ...
