"""AgentBridge Action Executor — Runs addon actions on the Agent through their proxies.

Addons are small automation building blocks made of one or more actions. A
proxy describes an action's inputs and outputs; executing it sends the
proxy's descriptor to the Agent and, when the action passes, binds the
returned output values onto the same proxy instance.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Protocol, TypeVar

from agentbridge.addons.binder import ActionBinder
from agentbridge.addons.proxy import ActionProxy, Locator
from agentbridge.models import REMOTE_DEFAULT_TIMEOUT_MS
from agentbridge.protocols import ExecutionResult, RemoteExecutor

logger = logging.getLogger("agentbridge.addons.executor")

P = TypeVar("P", bound=ActionProxy)

Timeout = float | dt.timedelta | None


class RemoteExecutionError(Exception):
    """Raised when the Agent reports that an action did not pass."""

    def __init__(self, message: str, result: ExecutionResult | None = None) -> None:
        self.message = message
        self.result = result
        super().__init__(message)


def timeout_to_ms(timeout: Timeout) -> int:
    """Convert a timeout in seconds (or a timedelta) to wire milliseconds."""
    if timeout is None:
        return REMOTE_DEFAULT_TIMEOUT_MS
    seconds = timeout.total_seconds() if isinstance(timeout, dt.timedelta) else float(timeout)
    if seconds < 0:
        raise ValueError(f"Timeout must not be negative, got {timeout!r}")
    return int(round(seconds * 1000))


class ActionExecutor:
    """Sends action descriptors to a RemoteExecutor and binds the results."""

    def __init__(self, remote: RemoteExecutor, binder: ActionBinder | None = None) -> None:
        self._remote = remote
        self._binder = binder or ActionBinder()

    def execute(self, proxy: P, locator: Locator | None = None, timeout: Timeout = None) -> P:
        """Execute ``proxy``'s action and return it with output fields updated.

        A locator, when given, is stored on the proxy's descriptor before the
        request is built. Raises RemoteExecutionError if the action fails; the
        proxy is left untouched in that case.
        """
        if locator is not None:
            proxy.descriptor.locator = locator
        return self._execute(proxy, timeout_to_ms(timeout))

    def _execute(self, proxy: P, timeout_ms: int) -> P:
        descriptor = proxy.descriptor
        payload = descriptor.to_payload(proxy)
        logger.debug(
            "Executing action %s (%s), timeout %d ms",
            descriptor.class_name,
            descriptor.addon_guid,
            timeout_ms,
        )

        result = self._remote.execute_action(payload, timeout_ms)
        if not result.passed:
            logger.info("Action %s failed: %s", descriptor.class_name, result.message)
            raise RemoteExecutionError(result.message, result)

        return self._binder.bind(proxy, result)


class GenericAction(Protocol):
    """A locally implemented action that drives the session's driver directly."""

    def run(self, driver: Any) -> Any: ...


class AddonsHelper:
    """Facade for running addon actions within a session.

    Obtained from ``AgentSession.addons()``.
    """

    def __init__(
        self,
        remote: RemoteExecutor,
        driver: Any = None,
        default_timeout: Timeout = None,
    ) -> None:
        self._executor = ActionExecutor(remote)
        self._driver = driver
        self._default_timeout = default_timeout

    def execute(self, proxy: P, locator: Locator | None = None, timeout: Timeout = None) -> P:
        """Execute a remote action through its proxy; see ActionExecutor.execute."""
        if timeout is None:
            timeout = self._default_timeout
        return self._executor.execute(proxy, locator=locator, timeout=timeout)

    def run(self, action: GenericAction) -> Any:
        """Run a local action against the session's driver."""
        return action.run(self._driver)
