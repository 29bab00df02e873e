"""Textual terminal UI for Vackup."""

from .app import VackupApp, run_panel

__all__ = ["VackupApp", "run_panel"]
