"""Reporting switches for one driver session."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class ReportingGate:
    """Four independent reporting toggles.

    ``reports_disabled`` is the master switch: while set, nothing is sent to
    the Agent regardless of the other three. Setting one toggle never changes
    another.
    """

    reports_disabled: bool = False
    command_reports_disabled: bool = False
    test_auto_reports_disabled: bool = False
    redaction_disabled: bool = False

    def is_reports_disabled(self) -> bool:
        return self.reports_disabled

    def set_reports_disabled(self, disabled: bool) -> None:
        self.reports_disabled = disabled

    def is_command_reports_disabled(self) -> bool:
        return self.command_reports_disabled

    def set_command_reports_disabled(self, disabled: bool) -> None:
        self.command_reports_disabled = disabled

    def is_test_auto_reports_disabled(self) -> bool:
        return self.test_auto_reports_disabled

    def set_test_auto_reports_disabled(self, disabled: bool) -> None:
        self.test_auto_reports_disabled = disabled

    def is_redaction_disabled(self) -> bool:
        return self.redaction_disabled

    def set_redaction_disabled(self, disabled: bool) -> None:
        self.redaction_disabled = disabled
