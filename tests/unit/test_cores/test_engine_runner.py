"""
Unit tests for EngineCommandRunner.

The Python interpreter stands in for the engine binary so real process
handling (exit codes, stderr, launch failures, timeouts) is exercised.
"""

import sys

import pytest

from vackup.cores.engine_runner import EngineCommandRunner
from vackup.errors import EngineError


def python_runner(**kwargs) -> EngineCommandRunner:
    return EngineCommandRunner(binary=sys.executable, **kwargs)


@pytest.mark.unit
class TestEngineCommandRunner:
    """Tests for execute()."""

    def test_build_command(self):
        runner = EngineCommandRunner()
        assert runner.build_command("ps", ["-a"]) == ["docker", "ps", "-a"]

    @pytest.mark.asyncio
    async def test_captures_stdout_and_stderr(self):
        runner = python_runner()

        result = await runner.execute(
            "-c", ["import sys; print('hello'); sys.stderr.write('note')"]
        )

        assert result.stdout.strip() == "hello"
        assert result.stderr == "note"
        assert result.return_code == 0
        assert result.command[0] == sys.executable

    @pytest.mark.asyncio
    async def test_parse_json_object(self):
        runner = python_runner()

        result = await runner.execute("-c", ["print('[{\"Name\": \"a\"}]')"])

        assert result.parse_json_object() == [{"Name": "a"}]

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self):
        runner = python_runner()

        with pytest.raises(EngineError) as exc_info:
            await runner.execute("-c", ["import sys; sys.stderr.write('boom'); sys.exit(3)"])

        assert exc_info.value.code == 3
        assert exc_info.value.stderr == "boom"
        assert exc_info.value.command[1] == "-c"

    @pytest.mark.asyncio
    async def test_missing_binary_raises(self, tmp_path):
        runner = EngineCommandRunner(binary=str(tmp_path / "no-such-engine"))

        with pytest.raises(EngineError) as exc_info:
            await runner.execute("ps", ["-a"])

        assert exc_info.value.code == "ENOENT"

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        runner = python_runner(timeout=0.2)

        with pytest.raises(EngineError) as exc_info:
            await runner.execute("-c", ["import time; time.sleep(5)"])

        assert exc_info.value.code == "ETIMEDOUT"
