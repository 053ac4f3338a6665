"""Step and test report messages sent to the Agent."""

from __future__ import annotations

import base64
import dataclasses
import logging
from typing import Any

from agentbridge.protocols import AgentReporter, ReportingCommands

logger = logging.getLogger("agentbridge.reporting.reports")


@dataclasses.dataclass
class StepReport:
    """A single manually reported step."""

    description: str
    message: str = ""
    passed: bool = True
    screenshot: bytes | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "description": self.description,
            "message": self.message,
            "passed": self.passed,
        }
        if self.screenshot:
            payload["screenshot"] = base64.b64encode(self.screenshot).decode("ascii")
        return payload


@dataclasses.dataclass
class TestReport:
    """Result of a test, sent when its boundary closes."""

    __test__ = False  # not a pytest test class

    name: str
    passed: bool = False
    message: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "passed": self.passed, "message": self.message}


class ClosableTestReport:
    """Handle for a manually reported test; the report is sent on close().

    Works as a context manager. ``passed`` and ``message`` may be updated
    before closing.
    """

    def __init__(
        self,
        agent: AgentReporter,
        commands: ReportingCommands,
        name: str,
        passed: bool = False,
        message: str | None = None,
    ) -> None:
        self._agent = agent
        self._commands = commands
        self.name = name
        self.passed = passed
        self.message = message
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if self._commands.is_reports_disabled():
            logger.debug("Test [%s] - [%s]", self.name, "Passed" if self.passed else "Failed")
            return

        report = TestReport(name=self.name, passed=self.passed, message=self.message)
        if not self._agent.report_test(report):
            logger.error("Failed reporting test [%s] to Agent", self.name)

    def __enter__(self) -> ClosableTestReport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
