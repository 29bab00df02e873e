"""Vackup terminal UI screens."""

from vackup.ui.screens.directory_picker import DirectoryOnlyTree, DirectoryPickerScreen

__all__ = [
    "DirectoryOnlyTree",
    "DirectoryPickerScreen",
]
