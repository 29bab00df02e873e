"""
Directory picker dialog for the Vackup terminal UI.

A modal screen with a directory-only tree. Dismisses with the chosen path,
or None when the user cancels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Static


class DirectoryOnlyTree(DirectoryTree):
    """DirectoryTree that hides plain files."""

    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [path for path in paths if path.is_dir()]


class DirectoryPickerScreen(ModalScreen[Optional[Path]]):
    """Modal dialog returning a directory path."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    DirectoryPickerScreen {
        align: center middle;
    }

    DirectoryPickerScreen #picker-dialog {
        width: 80%;
        height: 80%;
        background: #242424;
        border: round #3a3a3a;
        padding: 1 2;
    }

    DirectoryPickerScreen #picker-title {
        text-style: bold;
        padding: 0 0 1 0;
    }

    DirectoryPickerScreen #picker-tree {
        height: 1fr;
    }

    DirectoryPickerScreen #picker-selection {
        color: #a0a0a0;
        padding: 1 0;
    }

    DirectoryPickerScreen .button-row {
        height: auto;
        align: right middle;
    }

    DirectoryPickerScreen Button {
        margin: 0 1;
    }
    """

    def __init__(self, start_path: Optional[Path] = None, title: str = "Choose export directory") -> None:
        super().__init__()
        self.start_path = Path(start_path or Path.home()).expanduser()
        self.dialog_title = title
        self.selected: Path = self.start_path

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-dialog"):
            yield Static(self.dialog_title, id="picker-title")
            yield DirectoryOnlyTree(str(self.start_path), id="picker-tree")
            yield Static(str(self.selected), id="picker-selection")
            with Horizontal(classes="button-row"):
                yield Button("Cancel", variant="default", id="btn-cancel")
                yield Button("Select", variant="primary", id="btn-select")

    def on_directory_tree_directory_selected(self, event: DirectoryTree.DirectorySelected) -> None:
        self.selected = Path(event.path)
        self.query_one("#picker-selection", Static).update(str(self.selected))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-select":
            self.action_select()
        elif event.button.id == "btn-cancel":
            self.action_cancel()

    def action_select(self) -> None:
        self.dismiss(self.selected)

    def action_cancel(self) -> None:
        self.dismiss(None)
