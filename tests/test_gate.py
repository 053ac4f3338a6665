"""Unit tests for agentbridge.reporting.gate and agentbridge.reporting.commands."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from agentbridge.reporting.commands import ReportingCommandExecutor, infer_test_name
from agentbridge.reporting.gate import ReportingGate
from agentbridge.reporting.reports import TestReport

from conftest import FakeAgent


def _frame(function: str, module: str = "tests.test_checkout") -> SimpleNamespace:
    return SimpleNamespace(f_globals={"__name__": module}, f_code=SimpleNamespace(co_name=function))


# ---------------------------------------------------------------------------
# 1. ReportingGate toggles
# ---------------------------------------------------------------------------

TOGGLES = ["reports", "command_reports", "test_auto_reports", "redaction"]


class TestReportingGate:
    """Four independent, idempotent toggles, all enabled by default."""

    def test_defaults_all_enabled(self):
        gate = ReportingGate()
        assert not any(getattr(gate, f"is_{t}_disabled")() for t in TOGGLES)

    @pytest.mark.parametrize("toggle", TOGGLES)
    def test_setter_only_changes_its_own_flag(self, toggle: str):
        gate = ReportingGate()
        getattr(gate, f"set_{toggle}_disabled")(True)
        for other in TOGGLES:
            assert getattr(gate, f"is_{other}_disabled")() is (other == toggle)

    @pytest.mark.parametrize("toggle", TOGGLES)
    def test_setter_is_idempotent(self, toggle: str):
        gate = ReportingGate()
        setter = getattr(gate, f"set_{toggle}_disabled")
        setter(True)
        setter(True)
        assert getattr(gate, f"is_{toggle}_disabled")() is True
        setter(False)
        assert getattr(gate, f"is_{toggle}_disabled")() is False


# ---------------------------------------------------------------------------
# 2. infer_test_name()
# ---------------------------------------------------------------------------

class TestInferTestName:
    def test_innermost_test_function_wins(self):
        frames = [_frame("helper"), _frame("test_checkout"), _frame("test_outer"), _frame("<module>")]
        assert infer_test_name(frames) == "test_checkout"

    def test_internal_frames_skipped(self):
        frames = [_frame("test_internal", module="agentbridge.reporting.reporter"), _frame("test_real")]
        assert infer_test_name(frames) == "test_real"

    def test_falls_back_to_outermost_frame(self):
        frames = [_frame("login"), _frame("main"), _frame("<module>", module="__main__")]
        assert infer_test_name(frames) == "<module>"

    def test_no_user_frames(self):
        assert infer_test_name([_frame("step", module="agentbridge.session")]) is None


# ---------------------------------------------------------------------------
# 3. ReportingCommandExecutor.report_test()
# ---------------------------------------------------------------------------

class TestReportTest:
    """Test boundaries are reported as the inferred test changes."""

    def test_first_test_starts_without_report(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        assert commands.report_test([_frame("test_a")], False) is True
        assert commands.current_test == "test_a"
        assert fake_agent.tests == []

    def test_same_test_is_not_reported_again(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        commands.report_test([_frame("test_a")], False)
        commands.report_test([_frame("test_a")], False)
        assert fake_agent.tests == []

    def test_new_test_flushes_previous(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        commands.report_test([_frame("test_a")], False)
        commands.report_test([_frame("test_b")], False)
        assert fake_agent.tests == [TestReport(name="test_a", passed=True)]
        assert commands.current_test == "test_b"

    def test_flush_reports_current_test(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        commands.report_test([_frame("test_a")], False)
        assert commands.flush() is True
        assert [t.name for t in fake_agent.tests] == ["test_a"]
        assert commands.current_test is None
        assert commands.flush() is True
        assert len(fake_agent.tests) == 1

    def test_submission_failure_returns_false_and_logs(
        self, fake_agent: FakeAgent, caplog: pytest.LogCaptureFixture
    ):
        fake_agent.accept_reports = False
        commands = ReportingCommandExecutor(fake_agent)
        commands.report_test([_frame("test_a")], False)
        with caplog.at_level(logging.ERROR, logger="agentbridge.reporting.commands"):
            assert commands.report_test([_frame("test_b")], False) is False
        assert "test_a" in caplog.text

    def test_master_switch_blocks_everything(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        commands.report_test([_frame("test_a")], False)
        commands.set_reports_disabled(True)
        commands.report_test([_frame("test_b")], False)
        commands.flush()
        assert fake_agent.call_count == 0

    def test_automatic_boundaries_respect_auto_switch(self, fake_agent: FakeAgent):
        commands = ReportingCommandExecutor(fake_agent)
        commands.set_test_auto_reports_disabled(True)
        commands.report_test([_frame("test_a")], True)
        assert commands.current_test is None

    def test_switches_delegate_to_gate(self, fake_agent: FakeAgent):
        gate = ReportingGate()
        commands = ReportingCommandExecutor(fake_agent, gate)
        commands.set_redaction_disabled(True)
        commands.set_command_reports_disabled(True)
        assert gate.redaction_disabled and gate.command_reports_disabled
        assert commands.gate is gate
