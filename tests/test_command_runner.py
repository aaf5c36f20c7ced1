from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

import pytest

from store_tool.api.exceptions import ToolchainNotFoundError
from store_tool.core.command_runner import CommandRunner, format_command


def test_captures_output_and_exit_code() -> None:
    script = "import sys; print('hello'); print('oops', file=sys.stderr); sys.exit(3)"
    result = asyncio.run(CommandRunner().run(sys.executable, ["-c", script]))

    assert result.exit_code == 3
    assert not result.succeeded
    assert result.stdout.strip() == "hello"
    assert result.stderr.strip() == "oops"


def test_runs_in_working_directory(tmp_path: Path) -> None:
    script = "import os; print(os.getcwd())"
    result = asyncio.run(CommandRunner().run(sys.executable, ["-c", script], tmp_path))

    assert result.succeeded
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_undecodable_output_is_replaced() -> None:
    script = "import sys; sys.stdout.buffer.write(b'ok \\xff')"
    result = asyncio.run(CommandRunner().run(sys.executable, ["-c", script]))
    assert result.stdout == "ok \ufffd"


def test_missing_executable() -> None:
    with pytest.raises(ToolchainNotFoundError) as excinfo:
        asyncio.run(CommandRunner().run("store-tool-no-such-program", ["--version"]))
    assert excinfo.value.tool == "store-tool-no-such-program"


def test_cancellation_kills_the_process() -> None:
    async def scenario():
        task = asyncio.ensure_future(
            CommandRunner(kill_timeout=5).run(sys.executable, ["-c", "import time; time.sleep(60)"])
        )
        await asyncio.sleep(0.5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    started = time.monotonic()
    asyncio.run(scenario())
    assert time.monotonic() - started < 30


def test_format_command() -> None:
    assert format_command("msbuild", ["/p:A=1;B=2", "My Project.sln"]) == 'msbuild /p:A=1;B=2 "My Project.sln"'
