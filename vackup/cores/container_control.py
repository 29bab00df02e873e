################################################################################
# VACKUP
#
# @file:        container_control.py
# @module:      vackup.cores.container_control
# @description: Stop and restart containers attached to a volume (docker SDK).
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Quiesce containers around a volume export.

A running container writing into a volume while tar reads it produces an
inconsistent archive. Containers are stopped concurrently before the export
and started again afterwards. Only the ones that were actually running are
restarted.
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import docker
from docker.errors import DockerException

from ..constants import CONTAINER_STOP_TIMEOUT
from ..errors import EngineError
from ..helpers.logging import get_logger

logger = get_logger(__name__)


class ContainerControl:
    """Stops/starts the containers referencing a volume through the Docker API."""

    def __init__(self, client: Optional[Any] = None, stop_timeout: int = CONTAINER_STOP_TIMEOUT):
        self._client = client
        self.stop_timeout = stop_timeout

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as e:
                raise EngineError(f"Docker API not accessible: {e}", code="EDOCKERAPI") from e
        return self._client

    async def stop_for_volume(self, volume_name: str) -> List[str]:
        """
        Stop all running containers that mount the volume.

        Returns:
            Names of the containers that were stopped

        Raises:
            EngineError: If listing fails or any container could not be stopped
        """
        try:
            running = await asyncio.to_thread(
                self.client.containers.list, filters={"volume": volume_name}
            )
        except EngineError:
            raise
        except Exception as e:
            # the SDK lets requests' connection errors through unwrapped
            raise EngineError(
                f"Failed to list containers for volume {volume_name}: {e}",
                code=getattr(e, "status_code", None),
            ) from e

        if not running:
            logger.info(f"No running containers use volume {volume_name}")
            return []

        async def _stop(container: Any) -> str:
            logger.info(f"stopping container {container.name}...")
            await asyncio.to_thread(container.stop, timeout=self.stop_timeout)
            logger.info(f"container {container.name} stopped")
            return container.name

        results = await asyncio.gather(*(_stop(c) for c in running), return_exceptions=True)
        stopped = [r for r in results if isinstance(r, str)]
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            # leave nothing half-stopped behind
            await self.start(stopped, raise_on_error=False)
            raise EngineError(
                f"Failed to stop containers using volume {volume_name}: {failures[0]}",
                code=getattr(failures[0], "status_code", None),
            )
        return stopped

    async def start(self, names: List[str], raise_on_error: bool = True) -> List[str]:
        """
        Start containers by name.

        Returns:
            Names of the containers that failed to start
        """
        async def _start(name: str) -> None:
            logger.info(f"starting container {name}...")
            container = await asyncio.to_thread(self.client.containers.get, name)
            await asyncio.to_thread(container.start)
            logger.info(f"container {name} started")

        results = await asyncio.gather(*(_start(n) for n in names), return_exceptions=True)
        failed = [n for n, r in zip(names, results) if isinstance(r, BaseException)]
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.error(f"Failed to start container {name}: {result}")

        if failed and raise_on_error:
            raise EngineError(f"Failed to restart containers: {', '.join(failed)}")
        return failed
