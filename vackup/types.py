################################################################################
# VACKUP
#
# @file:        types.py
# @module:      vackup.types
# @description: Shared data models for volumes, table rows and command results.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
# ==============================================================================
# Notes:
# - Volume is parsed straight from the engine's disk-usage JSON
# - VolumeRow is a pure projection used by the table views
# - CommandResult mirrors the stdout/stderr pair returned by the engine CLI
################################################################################

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---- Engine data ----

class Volume(BaseModel):
    """One entry of `system df -v` volume output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="Name")
    driver: str = Field(default="", alias="Driver")
    links: int = Field(default=0, ge=0, alias="Links")
    mount_point: str = Field(default="", alias="Mountpoint")
    size: str = Field(default="", alias="Size")


@dataclass
class CommandResult:
    command: List[str]
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0

    def parse_json_object(self) -> Any:
        """Parse stdout as JSON."""
        return json.loads(self.stdout)


# ---- Panel data ----

@dataclass
class VolumeRow:
    id: int
    driver: str
    name: str
    links: int
    containers: Optional[str]
    mount_point: str
    size: str

    @property
    def container_names(self) -> List[str]:
        if not self.containers:
            return []
        return [c for c in self.containers.split("\n") if c]


@dataclass
class DialogResult:
    canceled: bool
    file_paths: List[str] = field(default_factory=list)


class ExportOutcome(str, Enum):
    SUCCESS = "success"
    HANDLED_ERROR = "handled_error"  # engine finished but wrote a real error
    FAILURE = "failure"  # engine call raised
    SKIPPED = "skipped"  # guard refused to start
