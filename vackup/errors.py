################################################################################
# VACKUP
#
# @file:        errors.py
# @module:      vackup.errors
# @description: Exception types raised by the engine runner and config layer.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

from __future__ import annotations

from typing import List, Optional, Union


class VackupError(Exception):
    """Base class for all Vackup errors."""


class EngineError(VackupError):
    """
    An engine CLI invocation failed.

    Raised when the engine binary cannot be launched or exits non-zero.

    Attributes:
        code: Exit status, or the errno name when the process never started
        stderr: Captured standard error (may be empty)
        command: The argument vector that was executed
    """

    def __init__(
        self,
        message: str,
        code: Union[int, str, None] = None,
        stderr: str = "",
        command: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.stderr = stderr
        self.command = command or []


class ConfigError(VackupError):
    """Configuration-related errors"""
    pass
