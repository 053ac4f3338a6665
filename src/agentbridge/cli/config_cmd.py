"""agentbridge config — Show the resolved session configuration."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from agentbridge.cli.options import ConfigOption, load_config
from agentbridge.credentials import mask_token

console = Console()


def show_config(config_path: Path | None = ConfigOption) -> None:
    """Print the configuration a session would use, with the token masked."""
    config = load_config(config_path, console)

    table = Table(title="AgentBridge configuration", show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("agent_url", config.agent_url)
    table.add_row("token", mask_token(config.token))
    table.add_row("request_timeout", f"{config.request_timeout:g}s")
    table.add_row(
        "default_action_timeout",
        "agent default" if config.default_action_timeout is None else f"{config.default_action_timeout:g}s",
    )
    table.add_row("disable_auto_reports", str(config.disable_auto_reports))
    table.add_row("disable_manual_reports", str(config.disable_manual_reports))
    console.print(table)
