"""AgentBridge Reporter — Manual step and test reporting to the Agent.

Reporting is best-effort: a report that cannot be submitted is logged and
dropped, it never fails the caller's test. The session's reporting switches
live on the driver's reporting command executor and are checked before every
report.
"""

from __future__ import annotations

import logging

from agentbridge.config import AgentBridgeConfig
from agentbridge.protocols import AgentReporter, ReportingCommands, ReportingDriver
from agentbridge.reporting.framework import FrameworkDetector, RunnerContext, live_frames
from agentbridge.reporting.reports import ClosableTestReport, StepReport

logger = logging.getLogger("agentbridge.reporting.reporter")


class Reporter:
    """Steps and tests reporter for a single driver session."""

    def __init__(
        self,
        driver: ReportingDriver,
        agent: AgentReporter,
        config: AgentBridgeConfig | None = None,
        runner: RunnerContext | None = None,
    ) -> None:
        """
        Args:
            driver: Driver to report on; provides the reporting switches and screenshots.
            agent: Report sink on the Agent.
            config: Session config; its ``disable_auto_reports`` and
                ``disable_manual_reports`` switches are fixed for the session.
            runner: The test runner driving this session. When omitted the
                call stack is inspected once, here, to find out.
        """
        self._driver = driver
        self._agent = agent
        self._config = config or AgentBridgeConfig()
        self._result: str | None = None

        if runner is None:
            runner = FrameworkDetector().detect()
        self._runner = runner

        # A BDD runner reports scenarios itself; automatic reports would duplicate them.
        if self._config.disable_auto_reports or runner.is_known_runner:
            self.disable_test_auto_reports(True)
            self.disable_command_reports(True)

    @property
    def runner(self) -> RunnerContext:
        return self._runner

    @property
    def last_result(self) -> str | None:
        return self._result

    @property
    def _commands(self) -> ReportingCommands:
        return self._driver.get_reporting_command_executor()

    # -- Switches ------------------------------------------------------------

    def disable_reports(self, disable: bool = True) -> None:
        """Enable or disable all types of reports."""
        self._commands.set_reports_disabled(disable)

    def disable_command_reports(self, disable: bool = True) -> None:
        """Enable or disable driver command reports."""
        self._commands.set_command_reports_disabled(disable)

    def disable_test_auto_reports(self, disable: bool = True) -> None:
        """Enable or disable automatic test reports.

        Test names are inferred from the call stack. Automatic reports must be
        disabled to report tests manually with :meth:`test`.
        """
        self._commands.set_test_auto_reports_disabled(disable)

    def disable_redaction(self, disable: bool = True) -> None:
        """Enable or disable redaction of values typed into secured elements.

        Secured elements are password inputs and their native equivalents;
        redacted values are reported as ``***``.
        """
        self._commands.set_redaction_disabled(disable)

    # -- Reports -------------------------------------------------------------

    def step(
        self,
        description: str,
        message: str = "",
        passed: bool = True,
        screenshot: bool = False,
    ) -> None:
        """Report a step, optionally with a screenshot of the current state."""
        if self._config.disable_manual_reports:
            logger.warning("Manual reporting is disabled")
            return

        commands = self._commands

        if not commands.is_reports_disabled() and not commands.is_test_auto_reports_disabled():
            commands.report_test(list(live_frames()), False)

        report = StepReport(
            description=description,
            message=message,
            passed=passed,
            screenshot=self._driver.get_screenshot() if screenshot else None,
        )

        if commands.is_reports_disabled():
            logger.debug("Step [%s] - [%s]", description, "Passed" if passed else "Failed")
            return

        if not self._agent.report_step(report):
            logger.error("Failed reporting step to Agent")

    def test(self, name: str, passed: bool = False, message: str | None = None) -> ClosableTestReport:
        """Create a test report, sent when the returned handle is closed.

        The result defaults to failed; pass ``passed=True`` or update the
        handle before closing it.
        """
        commands = self._commands
        if not commands.is_test_auto_reports_disabled():
            logger.warning(
                "Automatic test reports is enabled, disable it to report tests manually and avoid duplicates."
            )
        return ClosableTestReport(self._agent, commands, name, passed, message)

    def result(self, message: str) -> None:
        """Record an action's result message, reported after the addon is uploaded."""
        self._result = message
