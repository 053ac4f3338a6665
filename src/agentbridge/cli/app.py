"""AgentBridge CLI — Main Typer entry point.

Registers all subcommands and provides --version / --verbose global options.
"""

from __future__ import annotations

import typer
from rich.console import Console

from agentbridge import __version__

TAGLINE = "Remote addon actions and test reports for your automation Agent."

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"agentbridge v{__version__}", style="bold cyan")
        console.print(f"  {TAGLINE}", style="dim")
        raise typer.Exit()


app = typer.Typer(
    name="agentbridge",
    help=TAGLINE,
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show AgentBridge version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
) -> None:
    """AgentBridge -- talk to the automation Agent from the command line."""
    if verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(name)s  %(message)s")


# ── Register subcommands ──────────────────────────────────────────────────

from agentbridge.cli.config_cmd import show_config  # noqa: E402
from agentbridge.cli.step_cmd import step  # noqa: E402

app.command(name="config", help="Show the resolved session configuration.")(show_config)
app.command(name="step", help="Submit a manual step report to the Agent.")(step)
