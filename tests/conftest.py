"""
Shared pytest fixtures for Vackup tests.

Provides a scripted engine runner, a recording notifier and sample engine
output so no test needs a real container engine.
"""

import asyncio
import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest
from unittest.mock import MagicMock
from typer.testing import CliRunner

from vackup.cores.notifications import StaticDirectoryPicker
from vackup.cores.volume_panel import VolumePanel
from vackup.types import CommandResult


Response = Union[CommandResult, BaseException, Callable[[List[str]], Any], None]


class FakeRunner:
    """
    Stand-in for EngineCommandRunner.

    `responses` maps a subcommand to a CommandResult, an exception to raise,
    or a (possibly async) callable receiving the argument list.
    """

    binary = "docker"

    def __init__(self, responses: Optional[Dict[str, Response]] = None):
        self.responses: Dict[str, Response] = responses or {}
        self.calls: List[Tuple[str, List[str]]] = []

    async def execute(self, subcommand: str, args=()) -> CommandResult:
        args = list(args)
        self.calls.append((subcommand, args))
        response = self.responses.get(subcommand)
        if callable(response) and not isinstance(response, BaseException):
            response = response(args)
            if asyncio.iscoroutine(response):
                response = await response
        if isinstance(response, BaseException):
            raise response
        if response is None:
            response = CommandResult(command=["docker", subcommand, *args])
        return response

    def calls_for(self, subcommand: str) -> List[List[str]]:
        return [args for sub, args in self.calls if sub == subcommand]


class RecordingNotifier:
    """Collects notifications instead of showing them."""

    def __init__(self):
        self.errors: List[str] = []
        self.successes: List[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def success(self, message: str) -> None:
        self.successes.append(message)


@pytest.fixture
def make_listing():
    """Factory for engine `system df -v` results with the given volume names."""

    def _make_listing(*names: str, links: int = 0) -> CommandResult:
        stdout = json.dumps([
            {
                "Name": name,
                "Driver": "local",
                "Links": links,
                "Mountpoint": f"/var/lib/docker/volumes/{name}/_data",
                "Size": "10MB",
            }
            for name in names
        ])
        return CommandResult(command=["docker", "system", "df"], stdout=stdout)

    return _make_listing


@pytest.fixture
def cli_runner():
    """Typer CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sample_listing():
    """Listing from the engine in unsorted order: b before a."""
    return CommandResult(
        command=["docker", "system", "df"],
        stdout=json.dumps([
            {"Name": "b", "Driver": "local", "Links": 0,
             "Mountpoint": "/var/lib/docker/volumes/b/_data", "Size": "10MB"},
            {"Name": "a", "Driver": "local", "Links": 2,
             "Mountpoint": "/var/lib/docker/volumes/a/_data", "Size": "1.2GB"},
        ]),
    )


@pytest.fixture
def mock_docker_client():
    """Mock Docker SDK client for container operations."""
    mock_client = MagicMock()
    mock_client.containers.list.return_value = []
    return mock_client


@pytest.fixture
def panel_factory(fake_runner, notifier):
    """Factory building a VolumePanel wired to the fake runner and notifier.

    Usage:
        def test_something(panel_factory):
            panel = panel_factory(export_path="/backups")
    """

    def _make_panel(
        export_path: str = "",
        picker_path: Optional[str] = None,
        container_control: Any = None,
        stop_attached_containers: bool = False,
        on_change: Optional[Callable[[], None]] = None,
    ) -> VolumePanel:
        panel = VolumePanel(
            runner=fake_runner,
            notifier=notifier,
            picker=StaticDirectoryPicker(picker_path),
            container_control=container_control,
            stop_attached_containers=stop_attached_containers,
            on_change=on_change,
        )
        panel.export_path = export_path
        return panel

    return _make_panel
