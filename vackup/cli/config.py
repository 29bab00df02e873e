"""
Config commands for Vackup
"""

import typer

from vackup.helpers import ui_utils
from vackup.helpers.config import PanelConfig, get_config_path, save_config

app = typer.Typer(
    help="Show or create the configuration file",
)


@app.command(name="show")
def config_show(ctx: typer.Context):
    """Show the effective configuration"""
    config: PanelConfig = ctx.obj["config"] if ctx.obj else PanelConfig()
    path = ctx.obj.get("config_path") if ctx.obj else None

    table = ui_utils.create_table(
        f"Configuration ({path or get_config_path()})",
        [("Setting", "cyan", None), ("Value", "white", None)],
    )
    for key, value in config.model_dump().items():
        table.add_row(key, "-" if value is None else str(value))
    ui_utils.console.print(table)


@app.command(name="init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a configuration file with default values"""
    path = (ctx.obj.get("config_path") if ctx.obj else None) or get_config_path()

    if path.exists() and not force:
        ui_utils.print_warning(f"Configuration already exists: {path}")
        ui_utils.print_info("Use --force to overwrite")
        raise typer.Exit(1)

    save_config(PanelConfig(), path)
    ui_utils.print_success(f"Configuration written to {path}")


def register_to_main_app(main_app: typer.Typer):
    """Register config commands to main CLI app"""
    main_app.add_typer(app, name="config")
