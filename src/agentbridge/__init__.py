"""AgentBridge — remote addon actions and test reporting for an automation Agent."""

__version__ = "0.3.0"
