"""
Addon Blueprint Process - Running external commands

Commands run without a shell, output is captured, and a non-zero exit
raises CommandError.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from addon_blueprint.errors import CommandError

logger = logging.getLogger(__name__)


def local_bin_dirs(start: Path) -> list[Path]:
    """node_modules/.bin of start and every parent, nearest first."""
    start = Path(start).resolve()
    return [directory / "node_modules" / ".bin" for directory in (start, *start.parents)]


def command_env(
    cwd: Path,
    prefer_local: bool = False,
    local_dir: Path | None = None,
) -> dict[str, str]:
    env = dict(os.environ)
    if not prefer_local:
        return env

    dirs = local_bin_dirs(cwd)
    if local_dir is not None:
        dirs += [d for d in local_bin_dirs(local_dir) if d not in dirs]

    env["PATH"] = os.pathsep.join([*(str(d) for d in dirs), env.get("PATH", "")])
    return env


async def run_command(
    cmd: str,
    args: list[str],
    cwd: str | Path,
    prefer_local: bool = False,
    local_dir: str | Path | None = None,
) -> str:
    """
    Run cmd with args in cwd and return its stdout.

    Args:
        cmd: Executable name, resolved through PATH
        args: Arguments passed verbatim
        cwd: Working directory
        prefer_local: Look in node_modules/.bin directories before PATH
        local_dir: Extra directory whose node_modules/.bin chain is searched

    Raises:
        CommandError: the command exited with a non-zero status
    """
    cwd = Path(cwd)
    env = command_env(cwd, prefer_local, Path(local_dir) if local_dir else None)
    command = [cmd, *args]
    logger.info("Running %s in %s", " ".join(command), cwd)

    proc = await asyncio.create_subprocess_exec(
        *command,
        cwd=str(cwd),
        env=env,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    out = stdout.decode(errors="replace")
    err = stderr.decode(errors="replace")

    if proc.returncode != 0:
        raise CommandError(command, proc.returncode, err)

    logger.debug("%s finished: %s", cmd, out.strip())
    return out
