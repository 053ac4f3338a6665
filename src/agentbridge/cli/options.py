"""Shared option handling for AgentBridge subcommands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from agentbridge.config import AgentBridgeConfig, AgentBridgeConfigError
from agentbridge.credentials import resolve_token


def load_config(config_path: Path | None, console: Console) -> AgentBridgeConfig:
    """Build the session config: YAML file (optional), then env overrides, then token lookup.

    Exits with code 2 on configuration errors.
    """
    try:
        base = AgentBridgeConfig.from_file(config_path) if config_path else None
    except AgentBridgeConfigError as exc:
        console.print(Panel(f"[red]{exc}[/red]", title="[red]Config Error[/red]", border_style="red"))
        raise typer.Exit(code=2)

    config = AgentBridgeConfig.from_env(base)
    if not config.token:
        config.token = resolve_token(project_dir=config_path.parent if config_path else None)
    return config


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a YAML config file.",
    dir_okay=False,
)
