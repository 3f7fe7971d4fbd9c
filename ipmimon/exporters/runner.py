"""Run an external command with a hard timeout and capture its stdout"""
import asyncio
import logging
from typing import Optional, Sequence

from ..errors import CommandTimeoutError, ToolError, ToolMissingError

logger = logging.getLogger(__name__)


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill the child and reap it so no zombie is left behind"""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_command(argv: Sequence[str], timeout: float, server: Optional[str] = None) -> bytes:
    """
    Execute argv and return its standard output.

    Raises:
        ToolMissingError: argv[0] does not exist or is not executable
        CommandTimeoutError: the command ran longer than timeout seconds
        ToolError: the command exited with a non-zero status
        asyncio.CancelledError: the awaiting task was cancelled (the child is killed)
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
        raise ToolMissingError(argv[0], server) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(process)
        raise CommandTimeoutError(argv, timeout, server) from None
    except asyncio.CancelledError:
        await _kill(process)
        raise

    if process.returncode != 0:
        raise ToolError(argv, process.returncode, stdout, stderr, server)

    if stderr:
        logger.debug(f"{argv[0]} stderr: {stderr.decode(errors='replace').strip()}")
    return stdout
