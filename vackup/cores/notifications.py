"""
Notification sinks and directory pickers used by the volume panel.

The panel only talks to the two protocols below. The terminal UI provides
toast and modal-dialog implementations; the CLI uses the console ones here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from ..helpers import ui_utils
from ..helpers.logging import get_logger
from ..types import DialogResult

logger = get_logger(__name__)


class Notifier(Protocol):
    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


class DirectoryPicker(Protocol):
    async def show_open_dialog(self, options: Dict[str, Any]) -> DialogResult: ...


class ConsoleNotifier:
    """Prints notifications with Rich and keeps a history for exit codes."""

    def __init__(self) -> None:
        self.errors: List[str] = []
        self.successes: List[str] = []

    def error(self, message: str) -> None:
        logger.debug(f"error notification: {message}")
        self.errors.append(message)
        ui_utils.print_error(message.rstrip())

    def success(self, message: str) -> None:
        logger.debug(f"success notification: {message}")
        self.successes.append(message)
        ui_utils.print_success(message)


class StaticDirectoryPicker:
    """Answers every dialog with a directory fixed up front (None = cancel)."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = str(path) if path else None

    async def show_open_dialog(self, options: Dict[str, Any]) -> DialogResult:
        if not self.path:
            return DialogResult(canceled=True)
        return DialogResult(canceled=False, file_paths=[self.path])
