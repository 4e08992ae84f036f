"""Synchronous execution of external commands.

All real work (git, yarn, npm, npx) goes through :func:`run_command`. The
child inherits the terminal so the user sees its output directly.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from .errors import CommandFailedError

logger = logging.getLogger(__name__)

__all__ = ["run_command", "probe_command", "format_command"]


def format_command(command: Sequence[str]) -> str:
    """Render an argv list the way a user would type it."""
    return shlex.join(str(part) for part in command)


def _resolve_argv(command: Sequence[str]) -> list[str]:
    # Resolve through PATH so Windows .cmd shims (yarn.cmd, npx.cmd) are found.
    argv = [str(part) for part in command]
    executable = shutil.which(argv[0])
    if executable:
        argv[0] = executable
    return argv


def _child_env(env: Mapping[str, str] | None) -> dict[str, str]:
    merged = dict(os.environ)
    if env:
        merged.update(env)
    return merged


def run_command(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run *command* to completion, streaming its output to the terminal.

    Args:
        command: argv list, e.g. ``["yarn", "install"]``.
        cwd: Working directory for the child (defaults to the current one).
        env: Read-only overrides merged on top of ``os.environ`` for the
            child only.

    Raises:
        CommandFailedError: On a non-zero exit or when the command cannot
            be started.
    """
    text = format_command(command)
    logger.debug("Running %s (cwd=%s, env overrides=%s)", text, cwd or Path.cwd(), dict(env or {}))
    try:
        subprocess.run(
            _resolve_argv(command),
            cwd=str(cwd) if cwd is not None else None,
            env=_child_env(env),
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise CommandFailedError(text, str(e)) from e
    except OSError as e:
        raise CommandFailedError(text, str(e)) from e


def probe_command(command: Sequence[str]) -> bool:
    """Return True when *command* runs and exits 0, with all output suppressed."""
    try:
        result = subprocess.run(
            _resolve_argv(command),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        logger.debug("Probe %s could not start", format_command(command))
        return False
    logger.debug("Probe %s exited %s", format_command(command), result.returncode)
    return result.returncode == 0
