"""External command execution"""

import asyncio
import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..api.exceptions import ToolchainNotFoundError
from ..models import CommandResult

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external processes and captures their output

    Cancelling the awaiting task kills the child process; the
    ``asyncio.CancelledError`` is re-raised once the process is reaped.
    Nothing is retried here, callers decide which exit codes are fatal.
    """

    def __init__(self, encoding: str = 'utf-8', kill_timeout: float = 5.0):
        """
        Initialize command runner

        Args:
            encoding: Encoding used to decode captured output
            kill_timeout: Seconds to wait for a killed process to exit
        """
        self.encoding = encoding
        self.kill_timeout = kill_timeout

    async def run(self,
                  executable: Union[str, Path],
                  arguments: Sequence[str] = (),
                  working_directory: Optional[Union[str, Path]] = None) -> CommandResult:
        """
        Execute a command and wait for it to finish

        Args:
            executable: Program name or path
            arguments: Program arguments
            working_directory: Directory the process runs in

        Returns:
            CommandResult with exit code and decoded output

        Raises:
            ToolchainNotFoundError: If the executable cannot be found
        """
        program = self._resolve_executable(executable)
        arguments = [str(arg) for arg in arguments]
        cwd = str(working_directory) if working_directory else None

        logger.debug(f"Running {format_command(program, arguments)} in {cwd or '.'}")

        try:
            process = await asyncio.create_subprocess_exec(
                program,
                *arguments,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ToolchainNotFoundError(str(executable)) from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            logger.debug(f"Cancelled, terminating {program} (pid {process.pid})")
            await self._terminate(process)
            raise

        result = CommandResult(
            exit_code=process.returncode,
            stdout=stdout.decode(self.encoding, errors='replace'),
            stderr=stderr.decode(self.encoding, errors='replace'),
        )
        logger.debug(f"{program} exited with code {result.exit_code}")
        return result

    @staticmethod
    def _resolve_executable(executable: Union[str, Path]) -> str:
        """Resolve a bare program name through PATH (and PATHEXT on Windows)"""
        executable = str(executable)
        return shutil.which(executable) or executable

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        """Kill a running process and reap it"""
        if process.returncode is not None:
            return

        try:
            process.kill()
        except ProcessLookupError:
            return

        try:
            await asyncio.wait_for(process.wait(), timeout=self.kill_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Process {process.pid} did not exit after kill")


def format_command(executable: Union[str, Path], arguments: List[str]) -> str:
    """Render a command line for display"""
    return subprocess.list2cmdline([str(executable), *arguments])
