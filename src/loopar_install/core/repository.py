"""Cloning of the template repository."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import VCS_CLIENT
from .errors import CloneError, CommandFailedError, ToolMissingError
from .runner import run_command
from .tooling import is_tool_available

logger = logging.getLogger(__name__)

__all__ = ["is_git_available", "clone_repository"]


def is_git_available() -> bool:
    """Check if git is installed and responds to ``--version``."""
    return is_tool_available(VCS_CLIENT)


def clone_repository(repo_url: str, target_path: Path) -> None:
    """Clone *repo_url* into *target_path*; ``git clone`` creates the directory.

    Raises:
        ToolMissingError: If git is not installed.
        CloneError: If the clone itself fails.
    """
    if not is_git_available():
        raise ToolMissingError("git CLI not found. Please install Git to use this script.")

    logger.debug("Cloning %s into %s", repo_url, target_path)
    try:
        run_command([VCS_CLIENT, "clone", repo_url, str(target_path)])
    except CommandFailedError as e:
        raise CloneError(f"git clone failed: {e}") from e
