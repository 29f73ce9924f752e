"""
Shell command execution for the fallback strategies.
"""

import asyncio
import logging
import shlex
from dataclasses import dataclass
from typing import Optional

from .exceptions import ShellCommandError

logger = logging.getLogger(__name__)


@dataclass
class ShellResult:
    """Outcome of a shell command."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def quote(argument: str) -> str:
    """Escape a single argument for interpolation into a command line."""
    return shlex.quote(argument)


async def run_shell(command: str, cwd: Optional[str] = None,
                    timeout: Optional[float] = None) -> ShellResult:
    """
    Run a command line through the system shell and capture its output.

    Args:
        command: Command line, with every path already quoted
        cwd: Working directory for the command
        timeout: Seconds to wait before the process is killed

    Returns:
        ShellResult of a successful run

    Raises:
        ShellCommandError: If the command times out or exits non-zero
    """
    logger.debug(f"Running shell command in {cwd}: {command}")
    process = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise ShellCommandError(f"command timed out after {timeout} seconds: {command}")

    result = ShellResult(
        command=command,
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    if not result.success:
        raise ShellCommandError(
            f"command failed with exit code {result.returncode}: {command}: {result.stderr.strip()}",
            result,
        )
    return result
