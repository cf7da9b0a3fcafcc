"""Subprocess utilities"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..api.exceptions import CommandError


async def _pump(stream: asyncio.StreamReader, log_line, lines: List[str]) -> None:
    while True:
        raw = await stream.readline()
        if not raw:
            break
        line = raw.decode(errors='replace').rstrip()
        if line:
            lines.append(line)
            log_line(line)


async def run_command(args: Sequence[str],
                      cwd: Optional[Union[str, Path]] = None,
                      logger: Optional[logging.Logger] = None,
                      display: Optional[str] = None) -> str:
    """
    Run a command, streaming its output to a logger

    stdout lines are logged at INFO, stderr lines at ERROR.

    Args:
        args: Executable and arguments
        cwd: Working directory
        logger: Logger for the child output
        display: Command text used in logs and errors, e.g. with secrets masked

    Returns:
        Completion message

    Raises:
        CommandError: If the process exits with a non-zero code
        OSError: If the executable cannot be started
    """
    logger = logger or logging.getLogger(__name__)
    display = display or " ".join(args)
    logger.debug(f"Running: {display}")

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError:
        logger.error("Failed to start subprocess.")
        raise

    stdout_lines: List[str] = []
    stderr_lines: List[str] = []
    await asyncio.gather(
        _pump(process.stdout, logger.info, stdout_lines),
        _pump(process.stderr, logger.error, stderr_lines),
    )
    returncode = await process.wait()

    if returncode != 0:
        raise CommandError(display, returncode)
    return f"Child process exited with code {returncode}"
