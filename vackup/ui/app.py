"""
Main Textual Application for Vackup

Lists engine volumes in a table and exports a volume to a chosen
directory as a compressed archive.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Footer, Header, ProgressBar, Static

from ..constants import OPEN_DIRECTORY, VERSION
from ..cores.container_control import ContainerControl
from ..cores.engine_runner import EngineCommandRunner
from ..cores.volume_panel import VolumePanel
from ..helpers.config import PanelConfig
from ..helpers.logging import get_logger
from ..helpers.ui_utils import format_volume_name
from ..types import DialogResult
from .screens import DirectoryPickerScreen

logger = get_logger(__name__)

EXPORT_COLUMN = "action"


class TextualNotifier:
    """Shows panel notifications as Textual toasts."""

    def __init__(self, app: App) -> None:
        self.app = app

    def error(self, message: str) -> None:
        logger.error(message.rstrip())
        self.app.notify(message.rstrip(), title="Error", severity="error", timeout=8)

    def success(self, message: str) -> None:
        logger.info(message)
        self.app.notify(message, title="Success", severity="information")


class TextualDirectoryPicker:
    """Directory dialog backed by DirectoryPickerScreen. Must run inside a worker."""

    def __init__(self, app: App, start_path: Optional[Path] = None) -> None:
        self.app = app
        self.start_path = start_path

    async def show_open_dialog(self, options: Dict[str, Any]) -> DialogResult:
        if OPEN_DIRECTORY not in options.get("properties", []):
            raise ValueError("Only directory selection is supported")

        selected = await self.app.push_screen_wait(DirectoryPickerScreen(self.start_path))
        if selected is None:
            return DialogResult(canceled=True)
        return DialogResult(canceled=False, file_paths=[str(selected)])


class VackupApp(App):
    """Volume export panel"""

    TITLE = "Vackup"
    SUB_TITLE = f"v{VERSION}"

    CSS = """
    Screen {
        background: #1a1a1a;
    }

    #main {
        padding: 1 2;
        height: 100%;
    }

    #title {
        text-style: bold;
        color: #ffffff;
    }

    #description {
        color: #a0a0a0;
        margin-bottom: 1;
    }

    #path-row {
        height: auto;
        margin-bottom: 1;
    }

    #export-path {
        color: #a0a0a0;
        padding: 1 2;
    }

    #export-progress {
        margin-bottom: 1;
    }

    #volume-table {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("p", "choose_path", "Choose path", show=True),
        Binding("e", "export_selected", "Export", show=True),
        Binding("r", "reload", "Reload", show=True),
    ]

    def __init__(
        self,
        config: Optional[PanelConfig] = None,
        runner: Optional[EngineCommandRunner] = None,
        container_control: Optional[ContainerControl] = None,
        export_path: Optional[str] = None,
        start_directory: Optional[Path] = None,
        **kwargs,
    ):
        """
        Args:
            config: Panel configuration, defaults when omitted
            runner: Engine runner, built from config when omitted
            container_control: Docker API helper for stopping attached containers
            export_path: Initial export target
            start_directory: Where the directory dialog opens
        """
        super().__init__(**kwargs)
        self.panel_config = config or PanelConfig()
        self.initial_export_path = export_path
        self.panel = VolumePanel(
            runner=runner or EngineCommandRunner(
                self.panel_config.engine_binary, timeout=self.panel_config.command_timeout
            ),
            notifier=TextualNotifier(self),
            picker=TextualDirectoryPicker(self, start_directory),
            container_control=container_control or ContainerControl(
                stop_timeout=self.panel_config.stop_timeout
            ),
            helper_image=self.panel_config.helper_image,
            stop_attached_containers=self.panel_config.stop_attached_containers,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static("Vackup Extension", id="title")
            yield Static("Easily backup and restore docker volumes.", id="description")
            with Horizontal(id="path-row"):
                yield Button("Choose path", variant="primary", id="btn-choose-path")
                yield Static("", id="export-path")
            yield ProgressBar(id="export-progress", total=None, show_eta=False, show_percentage=False)
            yield DataTable(id="volume-table", cursor_type="cell", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#volume-table", DataTable)
        table.add_column("Driver", key="driver")
        table.add_column("Volume name", key="name")
        table.add_column("Containers", key="containers")
        table.add_column("Mount point", key="mount_point")
        table.add_column("Size", key="size")
        table.add_column("Action", key=EXPORT_COLUMN)

        self.panel.on_change = self.refresh_view
        if self.initial_export_path:
            self.panel.set_export_path(self.initial_export_path)
        self.refresh_view()
        self.action_reload()

    # --------------- Rendering ---------------

    def refresh_view(self) -> None:
        """Redraw everything derived from panel state."""
        self.query_one("#btn-choose-path", Button).disabled = not self.panel.directory_selection_enabled
        self.query_one("#export-path", Static).update(self.panel.export_path)
        self.query_one("#export-progress", ProgressBar).display = self.panel.loading

        table = self.query_one("#volume-table", DataTable)
        cursor = table.cursor_coordinate
        table.clear()

        if self.panel.export_enabled:
            export_cell = Text(" Export ", style="bold white on #0a84ff")
        else:
            export_cell = Text(" Export ", style="dim")

        for row in self.panel.rows():
            table.add_row(
                row.driver,
                format_volume_name(row),
                Text(row.containers or ""),
                row.mount_point,
                row.size,
                export_cell,
                key=row.name,
                height=None,
            )

        if table.row_count:
            table.move_cursor(
                row=min(cursor.row, table.row_count - 1),
                column=cursor.column,
                animate=False,
            )

    # --------------- Actions ---------------

    def action_reload(self) -> None:
        self.run_worker(self.panel.load(), group="load", exclusive=True)

    def action_choose_path(self) -> None:
        if not self.panel.directory_selection_enabled:
            return
        self.run_worker(self.panel.select_export_directory(), group="picker", exclusive=True)

    def action_export_selected(self) -> None:
        table = self.query_one("#volume-table", DataTable)
        if not table.row_count:
            return
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        self.export(row_key.value)

    def export(self, volume_name: str) -> None:
        """Start an export worker for one volume if the panel allows it."""
        if not self.panel.export_path:
            self.notify("Choose an export path first", severity="warning")
            return
        if self.panel.loading:
            self.notify("An export is already running", severity="warning")
            return
        self.run_worker(self.panel.export_volume(volume_name), group="export")

    # --------------- Events ---------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-choose-path":
            self.action_choose_path()

    def on_data_table_cell_selected(self, event: DataTable.CellSelected) -> None:
        if event.cell_key.column_key.value == EXPORT_COLUMN:
            event.stop()
            self.export(event.cell_key.row_key.value)


def run_panel(config: Optional[PanelConfig] = None, export_path: Optional[str] = None) -> None:
    """
    Run the interactive volume panel.

    Args:
        config: Panel configuration
        export_path: Optional initial export directory
    """
    app = VackupApp(config=config, export_path=export_path)
    app.run()


if __name__ == "__main__":
    run_panel()
