"""Core panel logic: engine access, container control and panel state."""

from .container_control import ContainerControl
from .engine_runner import EngineCommandRunner
from .notifications import ConsoleNotifier, DirectoryPicker, Notifier, StaticDirectoryPicker
from .volume_panel import VolumePanel, build_rows, strip_benign_diagnostics

__all__ = [
    "ContainerControl",
    "EngineCommandRunner",
    "ConsoleNotifier",
    "DirectoryPicker",
    "Notifier",
    "StaticDirectoryPicker",
    "VolumePanel",
    "build_rows",
    "strip_benign_diagnostics",
]
