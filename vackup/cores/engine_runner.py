################################################################################
# VACKUP
#
# @file:        engine_runner.py
# @module:      vackup.cores.engine_runner
# @description: Async wrapper around the container engine CLI.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Engine command runner.

Executes `<engine> <subcommand> <args...>` without a shell and returns the
captured output. Non-zero exit and launch failures raise EngineError.
"""

from __future__ import annotations

import asyncio
import errno
from typing import List, Optional, Sequence

from ..constants import DEFAULT_ENGINE_BINARY
from ..errors import EngineError
from ..helpers.logging import get_logger
from ..types import CommandResult

logger = get_logger(__name__)


class EngineCommandRunner:
    """Runs engine CLI commands on the current event loop."""

    def __init__(self, binary: str = DEFAULT_ENGINE_BINARY, timeout: Optional[float] = None):
        """
        Args:
            binary: Engine executable, e.g. "docker" or "podman"
            timeout: Per-command timeout in seconds, None to wait forever
        """
        self.binary = binary
        self.timeout = timeout

    def build_command(self, subcommand: str, args: Sequence[str]) -> List[str]:
        return [self.binary, subcommand, *args]

    async def execute(self, subcommand: str, args: Sequence[str] = ()) -> CommandResult:
        """
        Run an engine subcommand.

        Args:
            subcommand: First engine argument, e.g. "ps" or "run"
            args: Remaining arguments, passed verbatim

        Returns:
            CommandResult with decoded stdout/stderr

        Raises:
            EngineError: If the binary cannot be started, times out or exits non-zero
        """
        cmd = self.build_command(subcommand, args)
        logger.debug(f"Executing engine command: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            code = errno.errorcode.get(e.errno, e.errno) if e.errno else None
            logger.error(f"Failed to start {self.binary}: {e}")
            raise EngineError(
                f"Failed to start {self.binary}: {e.strerror or e}",
                code=code,
                stderr=str(e),
                command=cmd,
            ) from e

        try:
            stdout_b, stderr_b = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            logger.error(f"Engine command timed out after {self.timeout}s: {' '.join(cmd)}")
            raise EngineError(
                f"Command timed out after {self.timeout} seconds",
                code="ETIMEDOUT",
                command=cmd,
            ) from e

        stdout = stdout_b.decode("utf-8", errors="replace")
        stderr = stderr_b.decode("utf-8", errors="replace")

        if process.returncode != 0:
            logger.error(f"Engine command failed ({process.returncode}): {' '.join(cmd)}")
            logger.error(f"Error: {stderr.strip()}")
            raise EngineError(
                f"{self.binary} {subcommand} exited with status {process.returncode}",
                code=process.returncode,
                stderr=stderr,
                command=cmd,
            )

        return CommandResult(
            command=cmd,
            stdout=stdout,
            stderr=stderr,
            return_code=process.returncode,
        )
