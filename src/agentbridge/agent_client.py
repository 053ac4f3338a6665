"""AgentBridge Agent Client — HTTP transport to the local automation Agent.

Implements both Agent-side protocols: ``RemoteExecutor`` (addon action
execution) and ``AgentReporter`` (step and test reports). No retries happen
here; a failed action request surfaces immediately, a failed report is
logged and reported back as ``False``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from agentbridge.config import AgentBridgeConfig
from agentbridge.models import (
    ENDPOINT_ACTION_EXECUTION,
    ENDPOINT_REPORT_STEP,
    ENDPOINT_REPORT_TEST,
)
from agentbridge.protocols import ExecutionResult
from agentbridge.reporting.reports import StepReport, TestReport

logger = logging.getLogger("agentbridge.agent_client")


class AgentConnectionError(Exception):
    """Raised when an action request cannot be completed over HTTP."""

    pass


class AgentClient:
    """Talks to the Agent's REST API over a persistent requests session."""

    def __init__(self, config: AgentBridgeConfig | None = None, session: requests.Session | None = None) -> None:
        config = config or AgentBridgeConfig()
        self._base_url = config.agent_url.rstrip("/")
        self._request_timeout = config.request_timeout
        self._session = session if session is not None else requests.Session()
        if config.token:
            self._session.headers["Authorization"] = config.token

    @property
    def base_url(self) -> str:
        return self._base_url

    def execute_action(self, payload: dict[str, Any], timeout_ms: int) -> ExecutionResult:
        """Execute an addon action on the Agent and return its result.

        Raises AgentConnectionError on transport errors, non-2xx responses and
        malformed response bodies.
        """
        url = f"{self._base_url}{ENDPOINT_ACTION_EXECUTION}"
        # The action itself may take up to timeout_ms on the Agent side
        http_timeout = self._request_timeout + max(timeout_ms, 0) / 1000

        try:
            resp = self._session.post(
                url,
                json=payload,
                params={"timeout": timeout_ms},
                timeout=http_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise AgentConnectionError(f"Action execution request to {url} failed: {exc}") from exc

        if not isinstance(data, dict):
            raise AgentConnectionError(f"Unexpected action execution response from {url}: {data!r}")

        return ExecutionResult.from_dict(data)

    def report_step(self, report: StepReport) -> bool:
        return self._post_report(ENDPOINT_REPORT_STEP, report.to_payload())

    def report_test(self, report: TestReport) -> bool:
        return self._post_report(ENDPOINT_REPORT_TEST, report.to_payload())

    def close(self) -> None:
        self._session.close()

    def _post_report(self, path: str, payload: dict[str, Any]) -> bool:
        url = f"{self._base_url}{path}"
        try:
            resp = self._session.post(url, json=payload, timeout=self._request_timeout)
        except requests.RequestException as exc:
            logger.error("Report request to %s failed: %s", url, exc)
            return False

        if not resp.ok:
            logger.error("Agent rejected report (%s): %s", resp.status_code, resp.text[:200])
            return False
        return True
