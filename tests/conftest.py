"""Shared fixtures for AgentBridge unit tests."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from agentbridge.addons.coercion import FieldKind
from agentbridge.addons.proxy import ActionProxy, input_field, output_field
from agentbridge.protocols import ExecutionResult, ExecutionResultType, ResultField
from agentbridge.reporting.commands import ReportingCommandExecutor


# ---------------------------------------------------------------------------
# Fakes — in-memory Agent and driver
# ---------------------------------------------------------------------------

class FakeAgent:
    """Records every call; answers action executions from a queue."""

    def __init__(self) -> None:
        self.steps: list[Any] = []
        self.tests: list[Any] = []
        self.executions: list[tuple[dict[str, Any], int]] = []
        self.results: list[ExecutionResult] = []
        self.accept_reports = True
        self.closed = False

    def execute_action(self, payload: dict[str, Any], timeout_ms: int) -> ExecutionResult:
        self.executions.append((payload, timeout_ms))
        return self.results.pop(0)

    def report_step(self, report: Any) -> bool:
        self.steps.append(report)
        return self.accept_reports

    def report_test(self, report: Any) -> bool:
        self.tests.append(report)
        return self.accept_reports

    def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.steps) + len(self.tests)


class FakeDriver:
    """Driver collaborator backed by a real ReportingCommandExecutor."""

    def __init__(self, agent: FakeAgent, screenshot: bytes = b"\x89PNG-fake") -> None:
        self.commands = ReportingCommandExecutor(agent)
        self.screenshot_bytes = screenshot
        self.screenshots_taken = 0

    def get_reporting_command_executor(self) -> ReportingCommandExecutor:
        return self.commands

    def get_screenshot(self) -> bytes:
        self.screenshots_taken += 1
        return self.screenshot_bytes


# ---------------------------------------------------------------------------
# Sample proxy
# ---------------------------------------------------------------------------

@dataclasses.dataclass
class CountRowsAction(ActionProxy):
    addon_guid = "nL3rXvrUPUGTfSH52Yps7A"
    class_name = "io.addons.tables.CountRows"

    table_id: str = input_field(FieldKind.STRING, wire_name="tableId", default="orders")
    strict: bool = input_field(FieldKind.BOOLEAN, default=False)
    count: int = output_field(FieldKind.INT32, default=0)
    ratio: float = output_field(FieldKind.FLOAT64, default=0.0)
    found: bool = output_field(FieldKind.BOOLEAN, default=False)
    label: str = output_field(FieldKind.STRING, default="")


def passed_result(*fields: tuple[str, str | None, bool], message: str = "") -> ExecutionResult:
    return ExecutionResult(
        result_type=ExecutionResultType.PASSED,
        message=message,
        fields=[ResultField(name, value, is_output) for name, value, is_output in fields],
    )


def failed_result(message: str) -> ExecutionResult:
    return ExecutionResult(result_type=ExecutionResultType.FAILED, message=message)


@pytest.fixture
def fake_agent() -> FakeAgent:
    return FakeAgent()


@pytest.fixture
def fake_driver(fake_agent: FakeAgent) -> FakeDriver:
    return FakeDriver(fake_agent)


@pytest.fixture
def count_rows() -> CountRowsAction:
    return CountRowsAction()


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a valid AgentBridge config.yaml as a string."""
    return """\
agent_url: "http://agent.local:8686/"
token: "dev-token-abcdef12345"
request_timeout: 30
default_action_timeout: 15
disable_auto_reports: true
disable_manual_reports: false
"""
