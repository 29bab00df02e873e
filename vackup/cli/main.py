"""
Main CLI application using Typer

Entry point for Vackup.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from vackup.cli import config
from vackup.cli import volumes
from vackup.constants import VERSION
from vackup.errors import ConfigError
from vackup.helpers.config import load_config
from vackup.helpers.logging import setup_logging

# Create Typer app
app = typer.Typer(
    name="vackup",
    help="Vackup - list container volumes and export them as tar.gz archives",
    add_completion=False,
)

console = Console()

# Register sub-commands
volumes.register_to_main_app(app)
config.register_to_main_app(app)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config.json",
        dir_okay=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
):
    """
    Vackup - Volume Export Panel

    Use 'vackup ui' for the interactive panel.
    """
    try:
        panel_config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if debug:
        panel_config = panel_config.model_copy(update={"log_level": "DEBUG"})

    setup_logging(panel_config.log_level, panel_config.log_file)
    ctx.obj = {"config": panel_config, "config_path": config_path, "debug": debug}


@app.command()
def ui(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "--path", "-p",
        help="Initial export directory",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
):
    """Open the interactive volume panel"""
    from vackup.ui.app import run_panel

    panel_config = ctx.obj["config"]
    setup_logging(panel_config.log_level, panel_config.log_file, tui=True)
    run_panel(panel_config, export_path=str(path) if path else None)


@app.command()
def version():
    """Show version information"""
    console.print(f"[cyan]Vackup[/cyan] v{VERSION}")


def cli_main():
    """
    Entry point for CLI

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if "--debug" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
