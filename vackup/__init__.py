################################################################################
# VACKUP
#
# @file:        __init__.py
# @module:      vackup
# @description: Exposes version, data models and the panel for package consumers.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Vackup: list container-engine volumes and export them as tar.gz archives.

The panel runs as a Textual terminal UI (`vackup ui`) or through plain CLI
commands (`vackup volumes list`, `vackup volumes export`).
"""

from .constants import VERSION

__version__ = VERSION

from .errors import ConfigError, EngineError, VackupError
from .types import CommandResult, DialogResult, ExportOutcome, Volume, VolumeRow
from .cores import EngineCommandRunner, VolumePanel

__all__ = [
    "VERSION",
    "ConfigError",
    "EngineError",
    "VackupError",
    "CommandResult",
    "DialogResult",
    "ExportOutcome",
    "Volume",
    "VolumeRow",
    "EngineCommandRunner",
    "VolumePanel",
]
