"""AgentBridge session — wires a browser driver to the Agent.

One session per driver. The session owns the reporting switches, the
Reporter and the addons helper, and is the driver collaborator the Reporter
talks to. Sessions are not safe to share between threads.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from agentbridge.addons.executor import AddonsHelper
from agentbridge.agent_client import AgentClient
from agentbridge.config import AgentBridgeConfig
from agentbridge.protocols import AgentReporter, RemoteExecutor
from agentbridge.reporting.commands import ReportingCommandExecutor
from agentbridge.reporting.framework import RunnerContext
from agentbridge.reporting.reporter import Reporter

logger = logging.getLogger("agentbridge.session")


class _Agent(AgentReporter, RemoteExecutor, Protocol):
    pass


class AgentSession:
    """Reporting and addon execution for a single driver.

    ``driver`` is the external automation driver (e.g. a Selenium WebDriver
    or a Playwright page); it is only used for screenshots and local actions.
    """

    def __init__(
        self,
        driver: Any = None,
        config: AgentBridgeConfig | None = None,
        agent: _Agent | None = None,
        runner: RunnerContext | None = None,
    ) -> None:
        self._config = config if config is not None else AgentBridgeConfig.from_env()
        self._driver = driver
        self._client = AgentClient(self._config) if agent is None else None
        self._agent: _Agent = agent if agent is not None else self._client
        self._commands = ReportingCommandExecutor(self._agent)
        self._reporter = Reporter(self, self._agent, config=self._config, runner=runner)
        self._addons = AddonsHelper(
            self._agent,
            driver=driver,
            default_timeout=self._config.default_action_timeout,
        )
        self._closed = False

    @property
    def config(self) -> AgentBridgeConfig:
        return self._config

    @property
    def driver(self) -> Any:
        return self._driver

    def report(self) -> Reporter:
        return self._reporter

    def addons(self) -> AddonsHelper:
        return self._addons

    # -- Driver collaborator -------------------------------------------------

    def get_reporting_command_executor(self) -> ReportingCommandExecutor:
        return self._commands

    def get_screenshot(self) -> bytes | None:
        if self._driver is None:
            return None
        if hasattr(self._driver, "get_screenshot_as_png"):
            return self._driver.get_screenshot_as_png()
        return self._driver.screenshot()

    # -- Lifecycle -----------------------------------------------------------

    def quit(self) -> None:
        """Report the running test as finished and release the Agent connection."""
        if self._closed:
            return
        self._closed = True
        self._commands.flush()
        if self._client is not None:
            self._client.close()
        logger.debug("Session closed")

    def __enter__(self) -> AgentSession:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.quit()
