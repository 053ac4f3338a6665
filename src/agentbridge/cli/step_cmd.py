"""agentbridge step — Submit a manual step report without a browser driver."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from agentbridge.cli.options import ConfigOption, load_config
from agentbridge.reporting.framework import RunnerContext
from agentbridge.session import AgentSession

console = Console(stderr=True)


def step(
    description: str = typer.Argument(..., help="Step description."),
    message: str = typer.Option("", "--message", "-m", help="Step message."),
    failed: bool = typer.Option(False, "--failed", help="Mark the step as failed."),
    config_path: Path | None = ConfigOption,
) -> None:
    """Report a single step to the Agent."""
    config = load_config(config_path, console)
    if config.disable_manual_reports:
        console.print("[yellow]Manual reporting is disabled; nothing was sent.[/yellow]")
        raise typer.Exit(code=1)

    # A CLI invocation never runs under a BDD runner
    with AgentSession(config=config, runner=RunnerContext.NONE) as session:
        session.report().disable_test_auto_reports(True)
        session.report().step(description, message=message, passed=not failed)

    console.print(f"[green]Done:[/green] {description}")
