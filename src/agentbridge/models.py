"""Centralized defaults, environment switch names and Agent endpoints."""

# Agent
DEFAULT_AGENT_URL = "http://localhost:8585"
DEFAULT_REQUEST_TIMEOUT = 120  # seconds, HTTP round-trip to the Agent

# Remote action timeout sent on the wire when none is given (Agent default)
REMOTE_DEFAULT_TIMEOUT_MS = -1

# Environment switches (read once, by AgentBridgeConfig.from_env)
ENV_AGENT_URL = "AGENTBRIDGE_AGENT_URL"
ENV_TOKEN = "AGENTBRIDGE_TOKEN"
ENV_DISABLE_AUTO_REPORTS = "AGENTBRIDGE_DISABLE_AUTO_REPORTS"
ENV_DISABLE_MANUAL_REPORTS = "AGENTBRIDGE_DISABLE_MANUAL_REPORTS"

TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

# Agent endpoints
ENDPOINT_ACTION_EXECUTION = "/api/addons/executions"
ENDPOINT_REPORT_STEP = "/api/development/report/step"
ENDPOINT_REPORT_TEST = "/api/development/report/test"
