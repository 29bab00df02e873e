################################################################################
# VACKUP
#
# @file:        volume_panel.py
# @module:      vackup.cores.volume_panel
# @description: State and operations of the volume export panel.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
# ==============================================================================
# Notes:
# - All collaborators are injected; the panel holds no global client
# - Container lookups run concurrently and are merged by volume name
# - The loading flag is released in a finally block on every export or restore
################################################################################

"""
Volume export panel.

Lists engine volumes, resolves which containers use each of them, and
exports a volume to a host directory as `<volume>.tar.gz` through a
throwaway helper container. A volume can also be restored from an image
that carries its data under /volume-data. Views subscribe through
`on_change` and redraw from `rows()`.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..constants import (
    ARCHIVE_SUFFIX,
    BENIGN_TAR_DIAGNOSTIC,
    CONTAINER_EXPORT_PATH,
    CONTAINER_NAMES_FORMAT,
    CONTAINER_RESTORE_PATH,
    CONTAINER_VOLUME_PATH,
    DEFAULT_HELPER_IMAGE,
    GNU_TAR_DIAGNOSTIC,
    IMAGE_DATA_PATH,
    OPEN_DIRECTORY,
    VOLUMES_JSON_FORMAT,
)
from ..errors import EngineError
from ..helpers.logging import get_logger
from ..types import ExportOutcome, Volume, VolumeRow
from .container_control import ContainerControl
from .engine_runner import EngineCommandRunner
from .notifications import DirectoryPicker, Notifier

logger = get_logger(__name__)

BENIGN_TAR_DIAGNOSTICS = (BENIGN_TAR_DIAGNOSTIC, GNU_TAR_DIAGNOSTIC)


def build_rows(volumes: List[Volume], container_names: Dict[str, Optional[str]]) -> List[VolumeRow]:
    """Project volumes and resolved container names into sorted table rows."""
    ordered = sorted(volumes, key=lambda v: v.name)
    return [
        VolumeRow(
            id=index,
            driver=volume.driver,
            name=volume.name,
            links=volume.links,
            containers=container_names.get(volume.name),
            mount_point=volume.mount_point,
            size=volume.size,
        )
        for index, volume in enumerate(ordered)
    ]


def strip_benign_diagnostics(stderr: str) -> str:
    """Drop tar's "removing leading '/'" lines, return whatever is left verbatim."""
    remaining = [
        line for line in stderr.splitlines(keepends=True)
        if line.rstrip("\r\n") not in BENIGN_TAR_DIAGNOSTICS
    ]
    return "".join(remaining)


def error_detail(e: Exception) -> object:
    """Error code of an engine failure, the exception itself otherwise."""
    code = getattr(e, "code", None)
    return code if code is not None else e


class VolumePanel:
    """
    Owns the panel state: volumes, container names per volume, the export
    target path and the loading flag.

    Engine failures never raise out of the public operations; they are
    reported once through the notifier.
    """

    def __init__(
        self,
        runner: EngineCommandRunner,
        notifier: Notifier,
        picker: Optional[DirectoryPicker] = None,
        container_control: Optional[ContainerControl] = None,
        helper_image: str = DEFAULT_HELPER_IMAGE,
        stop_attached_containers: bool = False,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.runner = runner
        self.notifier = notifier
        self.picker = picker
        self.container_control = container_control
        self.helper_image = helper_image
        self.stop_attached_containers = stop_attached_containers
        self.on_change = on_change

        self.volumes: List[Volume] = []
        self.container_names: Dict[str, Optional[str]] = {}
        self.export_path: str = ""
        self.loading: bool = False

    # --------------- Derived state ---------------

    def rows(self) -> List[VolumeRow]:
        return build_rows(self.volumes, self.container_names)

    @property
    def export_enabled(self) -> bool:
        return bool(self.export_path) and not self.loading

    @property
    def directory_selection_enabled(self) -> bool:
        return not self.loading

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # --------------- Listing ---------------

    async def load(self) -> None:
        """
        Fetch the volume list, then resolve containers for every volume.

        Lookups run concurrently; each result is merged under its volume
        name as soon as it arrives, in whatever order they complete.
        """
        self.volumes = await self.list_volumes()
        self.container_names = {}
        self._changed()

        if not self.volumes:
            return

        async def _lookup(name: str) -> Tuple[str, Optional[str]]:
            return name, await self.get_containers_for_volume(name)

        for next_result in asyncio.as_completed([_lookup(v.name) for v in self.volumes]):
            name, containers = await next_result
            self.container_names[name] = containers
            self._changed()

    async def list_volumes(self) -> List[Volume]:
        """
        List volumes via the engine's disk-usage command.

        Returns:
            Volumes sorted by name, empty on any error
        """
        try:
            result = await self.runner.execute(
                "system", ["df", "-v", "--format", VOLUMES_JSON_FORMAT]
            )
        except EngineError as e:
            self.notifier.error(f"Failed to list volumes: {e.stderr}")
            return []
        except Exception as e:
            logger.error(f"Volume listing failed: {e}", exc_info=True)
            self.notifier.error(f"Failed to list volumes: {e}")
            return []

        if result.stderr != "":
            self.notifier.error(result.stderr)
            return []

        try:
            data = result.parse_json_object() or []
            volumes = [Volume.model_validate(item) for item in data]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Unexpected volume listing output: {result.stdout[:200]!r}")
            self.notifier.error(f"Failed to list volumes: {e}")
            return []

        logger.debug(f"Found {len(volumes)} volumes")
        return sorted(volumes, key=lambda v: v.name)

    async def get_containers_for_volume(self, volume_name: str) -> Optional[str]:
        """
        Names of all containers (running or not) that reference a volume.

        Returns:
            Newline-joined names as printed by the engine, None if the call failed
        """
        try:
            output = await self.runner.execute(
                "ps",
                ["-a", f"--filter=volume={volume_name}", f"--format={CONTAINER_NAMES_FORMAT}"],
            )
        except EngineError as e:
            self.notifier.error(
                f"Failed to get containers for volume {volume_name}: "
                f"{e.stderr} Error code: {e.code}"
            )
            return None
        except Exception as e:
            logger.error(f"Container lookup for {volume_name} failed: {e}", exc_info=True)
            self.notifier.error(
                f"Failed to get containers for volume {volume_name}: "
                f"{e} Error code: {getattr(e, 'code', None)}"
            )
            return None

        if output.stderr != "":
            self.notifier.error(output.stderr)

        return output.stdout

    # --------------- Directory selection ---------------

    async def select_export_directory(self) -> Optional[str]:
        """
        Ask the directory picker for the export target.

        Returns:
            The new export path, None if the dialog was cancelled
        """
        if self.picker is None:
            raise RuntimeError("No directory picker configured")
        if not self.directory_selection_enabled:
            logger.warning("Export in progress, directory selection ignored")
            return None

        result = await self.picker.show_open_dialog({"properties": [OPEN_DIRECTORY]})
        if result.canceled or not result.file_paths:
            logger.debug("Directory selection cancelled")
            return None

        self.set_export_path(result.file_paths[0])
        return self.export_path

    def set_export_path(self, path: str) -> None:
        self.export_path = str(path)
        logger.info(f"Export path set to {self.export_path}")
        self._changed()

    # --------------- Attached containers ---------------

    async def _stop_attached(self, volume_name: str) -> List[str]:
        if self.container_control is None:
            return []
        return await self.container_control.stop_for_volume(volume_name)

    async def _restart(self, stopped: List[str]) -> None:
        if not stopped:
            return
        failed = await self.container_control.start(stopped, raise_on_error=False)
        if failed:
            self.notifier.error(f"Failed to restart containers: {', '.join(failed)}")

    # --------------- Export ---------------

    def export_args(self, volume_name: str, export_path: str) -> List[str]:
        """Arguments of the `run` call that archives a volume."""
        return [
            "--rm",
            f"-v={volume_name}:{CONTAINER_VOLUME_PATH}",
            f"-v={export_path}:{CONTAINER_EXPORT_PATH}",
            self.helper_image,
            "tar",
            "-zcvf",
            f"{CONTAINER_EXPORT_PATH}/{volume_name}{ARCHIVE_SUFFIX}",
            CONTAINER_VOLUME_PATH,
        ]

    async def export_volume(
        self, volume_name: str, stop_containers: Optional[bool] = None
    ) -> ExportOutcome:
        """
        Archive a volume into the export path.

        Args:
            volume_name: Volume to export
            stop_containers: Stop running containers using the volume during
                the export, defaults to the panel setting

        Returns:
            ExportOutcome of this invocation
        """
        if not self.export_path:
            logger.warning(f"No export path chosen, not exporting {volume_name}")
            return ExportOutcome.SKIPPED
        if self.loading:
            logger.warning(f"Export already running, not exporting {volume_name}")
            return ExportOutcome.SKIPPED

        if stop_containers is None:
            stop_containers = self.stop_attached_containers

        export_path = self.export_path
        failure_prefix = f"Failed to backup volume {volume_name} to {export_path}"
        self.loading = True
        self._changed()

        stopped: List[str] = []
        try:
            if stop_containers:
                try:
                    stopped = await self._stop_attached(volume_name)
                except Exception as e:
                    self.notifier.error(f"{failure_prefix}: {e}")
                    return ExportOutcome.FAILURE

            try:
                output = await self.runner.execute("run", self.export_args(volume_name, export_path))
            except Exception as e:
                if not isinstance(e, EngineError):
                    logger.error(f"Export of {volume_name} failed: {e}", exc_info=True)
                self.notifier.error(f"{failure_prefix}: {error_detail(e)}")
                return ExportOutcome.FAILURE

            errors = strip_benign_diagnostics(output.stderr)
            if errors:
                self.notifier.error(errors)
                return ExportOutcome.HANDLED_ERROR

            logger.info(f"Exported {volume_name} to {export_path}/{volume_name}{ARCHIVE_SUFFIX}")
            self.notifier.success(f"Volume {volume_name} exported to {export_path}")
            return ExportOutcome.SUCCESS
        finally:
            await self._restart(stopped)
            self.loading = False
            self._changed()

    # --------------- Restore ---------------

    def load_args(self, volume_name: str, image: str) -> List[str]:
        """Arguments of the `run` call that replaces a volume's content with an image's."""
        target = CONTAINER_RESTORE_PATH
        script = (
            # ..?* and .[!.]* match hidden entries without '.' and '..'
            f"rm -rf {target}/..?* {target}/.[!.]* {target}/* "
            f"&& cp -Rp {IMAGE_DATA_PATH}/. {target}/"
        )
        return [
            "--rm",
            f"-v={volume_name}:{target}",
            image,
            "/bin/sh",
            "-c",
            script,
        ]

    async def load_volume_from_image(
        self, volume_name: str, image: str, stop_containers: bool = True
    ) -> ExportOutcome:
        """
        Replace the content of a volume with the data shipped in an image.

        The image must carry the data under /volume-data. Running containers
        using the volume are stopped first and started again afterwards.

        Args:
            volume_name: Volume to overwrite
            image: Image holding the data
            stop_containers: Stop running containers using the volume meanwhile

        Returns:
            ExportOutcome of this invocation
        """
        if not volume_name or not image:
            logger.warning("Volume and image are required to load a volume")
            return ExportOutcome.SKIPPED
        if self.loading:
            logger.warning(f"Operation already running, not loading {image} into {volume_name}")
            return ExportOutcome.SKIPPED

        failure_prefix = f"Failed to load image {image} into volume {volume_name}"
        self.loading = True
        self._changed()

        stopped: List[str] = []
        try:
            if stop_containers:
                try:
                    stopped = await self._stop_attached(volume_name)
                except Exception as e:
                    self.notifier.error(f"{failure_prefix}: {e}")
                    return ExportOutcome.FAILURE

            try:
                output = await self.runner.execute("run", self.load_args(volume_name, image))
            except Exception as e:
                if not isinstance(e, EngineError):
                    logger.error(f"Loading {image} into {volume_name} failed: {e}", exc_info=True)
                self.notifier.error(f"{failure_prefix}: {error_detail(e)}")
                return ExportOutcome.FAILURE

            if output.stderr != "":
                self.notifier.error(output.stderr)
                return ExportOutcome.HANDLED_ERROR

            logger.info(f"Loaded {image} into volume {volume_name}")
            self.notifier.success(f"Image {image} loaded into volume {volume_name}")
            return ExportOutcome.SUCCESS
        finally:
            await self._restart(stopped)
            self.loading = False
            self._changed()
