"""Driver-side reporting commands: the session's switches plus test boundaries.

``ReportingCommandExecutor`` is what ``get_reporting_command_executor()``
returns. It owns the session's :class:`ReportingGate` and infers which test is
running from the call stack so that steps are grouped under the right test on
the Agent.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from agentbridge.protocols import AgentReporter
from agentbridge.reporting.gate import ReportingGate
from agentbridge.reporting.reports import TestReport

logger = logging.getLogger("agentbridge.reporting.commands")

_INTERNAL_PREFIX = "agentbridge."


def infer_test_name(frames: Iterable[Any]) -> str | None:
    """Name the running test from ``frames`` (innermost first).

    Prefers the innermost function following the ``test*`` naming convention
    used by pytest and unittest; otherwise falls back to the outermost frame
    outside this package.
    """
    outermost: str | None = None
    for frame in frames:
        module_name = (getattr(frame, "f_globals", None) or {}).get("__name__", "")
        if module_name == "agentbridge" or module_name.startswith(_INTERNAL_PREFIX):
            continue
        name = frame.f_code.co_name
        if name.startswith("test"):
            return name
        outermost = name
    return outermost


class ReportingCommandExecutor:
    """Reporting switches and automatic test-boundary reports for one session."""

    def __init__(self, agent: AgentReporter, gate: ReportingGate | None = None) -> None:
        self._agent = agent
        self._gate = gate if gate is not None else ReportingGate()
        self._current_test: str | None = None

    @property
    def gate(self) -> ReportingGate:
        return self._gate

    @property
    def current_test(self) -> str | None:
        return self._current_test

    # -- Switches ------------------------------------------------------------

    def is_reports_disabled(self) -> bool:
        return self._gate.is_reports_disabled()

    def set_reports_disabled(self, disabled: bool) -> None:
        self._gate.set_reports_disabled(disabled)

    def is_command_reports_disabled(self) -> bool:
        return self._gate.is_command_reports_disabled()

    def set_command_reports_disabled(self, disabled: bool) -> None:
        self._gate.set_command_reports_disabled(disabled)

    def is_test_auto_reports_disabled(self) -> bool:
        return self._gate.is_test_auto_reports_disabled()

    def set_test_auto_reports_disabled(self, disabled: bool) -> None:
        self._gate.set_test_auto_reports_disabled(disabled)

    def is_redaction_disabled(self) -> bool:
        return self._gate.is_redaction_disabled()

    def set_redaction_disabled(self, disabled: bool) -> None:
        self._gate.set_redaction_disabled(disabled)

    # -- Test boundaries -----------------------------------------------------

    def report_test(self, frames: Iterable[Any], is_automatic: bool) -> bool:
        """Start a new test if ``frames`` show a different test than the current one.

        The previous test, if any, is reported as it ends. Returns False only
        when that report could not be submitted.
        """
        if self._gate.is_reports_disabled():
            return True
        if is_automatic and self._gate.is_test_auto_reports_disabled():
            return True

        name = infer_test_name(frames)
        if name is None or name == self._current_test:
            return True

        submitted = self.flush()
        logger.debug("Test boundary: [%s] started", name)
        self._current_test = name
        return submitted

    def flush(self) -> bool:
        """Report the current test as finished, if there is one."""
        if self._current_test is None:
            return True
        name, self._current_test = self._current_test, None

        if self._gate.is_reports_disabled():
            return True

        if not self._agent.report_test(TestReport(name=name, passed=True)):
            logger.error("Failed reporting test [%s] to Agent", name)
            return False
        return True
