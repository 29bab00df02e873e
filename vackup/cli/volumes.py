"""
Volume commands for Vackup

List engine volumes, export one of them or restore one from an image
without the terminal UI.
"""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer

from vackup.cores.container_control import ContainerControl
from vackup.cores.engine_runner import EngineCommandRunner
from vackup.cores.notifications import ConsoleNotifier, StaticDirectoryPicker
from vackup.cores.volume_panel import VolumePanel
from vackup.helpers import ui_utils
from vackup.helpers.config import PanelConfig
from vackup.types import ExportOutcome

# Create sub-app for volume commands
app = typer.Typer(
    help="List, export and restore volumes",
)


def build_panel(config: PanelConfig, export_path: Optional[Path] = None) -> VolumePanel:
    """Wire a panel with console collaborators."""
    return VolumePanel(
        runner=EngineCommandRunner(config.engine_binary, timeout=config.command_timeout),
        notifier=ConsoleNotifier(),
        picker=StaticDirectoryPicker(export_path),
        container_control=ContainerControl(stop_timeout=config.stop_timeout),
        helper_image=config.helper_image,
        stop_attached_containers=config.stop_attached_containers,
    )


def _config(ctx: typer.Context) -> PanelConfig:
    if ctx.obj and "config" in ctx.obj:
        return ctx.obj["config"]
    return PanelConfig()


@app.command(name="list")
def volumes_list(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print rows as JSON"),
):
    """
    List volumes with the containers using them
    """
    panel = build_panel(_config(ctx))
    asyncio.run(panel.load())
    rows = panel.rows()

    if as_json:
        typer.echo(json.dumps([asdict(row) for row in rows], indent=2))
    elif rows:
        ui_utils.console.print(ui_utils.create_volume_table(rows))
    else:
        ui_utils.print_warning("No volumes found")

    if panel.notifier.errors:
        raise typer.Exit(1)


@app.command(name="export")
def volumes_export(
    ctx: typer.Context,
    volume: str = typer.Argument(..., help="Volume to export"),
    to: Path = typer.Option(
        ...,
        "--to", "-t",
        help="Directory receiving <volume>.tar.gz",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    stop_containers: Optional[bool] = typer.Option(
        None,
        "--stop-containers/--no-stop-containers",
        help="Stop running containers using the volume during the export",
    ),
):
    """
    Export a volume to a directory as a compressed archive
    """
    panel = build_panel(_config(ctx), export_path=to)

    async def _run() -> ExportOutcome:
        await panel.select_export_directory()
        ui_utils.print_info(f"Exporting {volume} to {panel.export_path}")
        return await panel.export_volume(volume, stop_containers=stop_containers)

    outcome = asyncio.run(_run())
    if outcome is not ExportOutcome.SUCCESS:
        raise typer.Exit(1)


@app.command(name="load")
def volumes_load(
    ctx: typer.Context,
    volume: str = typer.Argument(..., help="Volume to overwrite"),
    image: str = typer.Option(
        ...,
        "--image", "-i",
        help="Image carrying the data under /volume-data",
    ),
    stop_containers: bool = typer.Option(
        True,
        "--stop-containers/--no-stop-containers",
        help="Stop running containers using the volume while it is replaced",
    ),
):
    """
    Replace the content of a volume with the data of an image
    """
    panel = build_panel(_config(ctx))
    ui_utils.print_warning(f"Existing content of {volume} will be removed")
    ui_utils.print_info(f"Loading {image} into {volume}")

    outcome = asyncio.run(panel.load_volume_from_image(volume, image, stop_containers=stop_containers))
    if outcome is not ExportOutcome.SUCCESS:
        raise typer.Exit(1)


def register_to_main_app(main_app: typer.Typer):
    """Register volume commands to main CLI app"""
    main_app.add_typer(app, name="volumes")
