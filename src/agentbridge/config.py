"""AgentBridge configuration management."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from agentbridge.models import (
    DEFAULT_AGENT_URL,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_AGENT_URL,
    ENV_DISABLE_AUTO_REPORTS,
    ENV_DISABLE_MANUAL_REPORTS,
    TRUTHY_VALUES,
)


class AgentBridgeConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


def _is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY_VALUES


@dataclass
class AgentBridgeConfig:
    """Configuration for a single Agent session."""

    # Agent
    agent_url: str = DEFAULT_AGENT_URL
    # repr=False keeps the token out of logs and tracebacks that print the config.
    token: str = field(default="", repr=False)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    # Switches resolved once per session
    disable_auto_reports: bool = False
    disable_manual_reports: bool = False

    # Remote action timeout in seconds (None lets the Agent decide)
    default_action_timeout: float | None = None

    @classmethod
    def from_file(cls, config_path: Path) -> AgentBridgeConfig:
        """Load config from a YAML file."""
        if not config_path.exists():
            raise AgentBridgeConfigError(
                f"Config file not found: {config_path}\n\n"
                "To fix: create it or pass --config with an existing file"
            )
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise AgentBridgeConfigError(f"Config file must contain a mapping: {config_path}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> AgentBridgeConfig:
        """Create config from a dictionary."""
        config = cls()

        if "agent_url" in data:
            config.agent_url = str(data["agent_url"]).rstrip("/")
        if "token" in data:
            config.token = str(data["token"] or "")
        if "disable_auto_reports" in data:
            config.disable_auto_reports = _is_truthy(data["disable_auto_reports"])
        if "disable_manual_reports" in data:
            config.disable_manual_reports = _is_truthy(data["disable_manual_reports"])

        try:
            if "request_timeout" in data:
                config.request_timeout = float(data["request_timeout"])
            if data.get("default_action_timeout") is not None:
                config.default_action_timeout = float(data["default_action_timeout"])
        except (TypeError, ValueError) as exc:
            raise AgentBridgeConfigError(f"Invalid timeout value: {exc}") from exc

        if config.request_timeout <= 0:
            raise AgentBridgeConfigError("request_timeout must be a positive number of seconds")

        return config

    @classmethod
    def from_env(
        cls,
        base: AgentBridgeConfig | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AgentBridgeConfig:
        """Return a copy of ``base`` with environment overrides applied.

        This is the only place the process environment is consulted; the
        resulting switches travel with the config object afterwards.
        """
        env = os.environ if environ is None else environ
        config = dataclasses.replace(base) if base is not None else cls()

        if url := env.get(ENV_AGENT_URL):
            config.agent_url = url.rstrip("/")
        if ENV_DISABLE_AUTO_REPORTS in env:
            config.disable_auto_reports = _is_truthy(env[ENV_DISABLE_AUTO_REPORTS])
        if ENV_DISABLE_MANUAL_REPORTS in env:
            config.disable_manual_reports = _is_truthy(env[ENV_DISABLE_MANUAL_REPORTS])

        return config
