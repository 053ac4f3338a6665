"""AgentBridge reporting — step/test reports and the switches that gate them."""

from agentbridge.reporting.commands import ReportingCommandExecutor
from agentbridge.reporting.framework import (
    FrameworkDetector,
    RunnerContext,
    register_runner_marker,
    runner_marker,
)
from agentbridge.reporting.gate import ReportingGate
from agentbridge.reporting.reporter import Reporter
from agentbridge.reporting.reports import ClosableTestReport, StepReport, TestReport

__all__ = [
    "ClosableTestReport",
    "FrameworkDetector",
    "Reporter",
    "ReportingCommandExecutor",
    "ReportingGate",
    "RunnerContext",
    "StepReport",
    "TestReport",
    "register_runner_marker",
    "runner_marker",
]
