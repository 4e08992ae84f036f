"""Detection and installation of the package manager."""

from __future__ import annotations

import logging

from rich.console import Console

from .config import FALLBACK_INSTALLER, PACKAGE_MANAGER
from .errors import CommandFailedError, ToolMissingError
from .runner import probe_command, run_command

logger = logging.getLogger(__name__)

__all__ = ["is_tool_available", "ensure_package_manager"]


def is_tool_available(tool: str) -> bool:
    """Check whether *tool* answers ``--version``."""
    return probe_command([tool, "--version"])


def ensure_package_manager(console: Console | None = None) -> None:
    """Make sure Yarn is callable, installing it globally through npm if not.

    Raises:
        ToolMissingError: If the global install fails.
    """
    console = console or Console()
    if is_tool_available(PACKAGE_MANAGER):
        console.print("Yarn is already installed.")
        return

    console.print("[yellow]Yarn is not installed.[/yellow] Installing Yarn globally via npm...")
    try:
        run_command([FALLBACK_INSTALLER, "install", "-g", PACKAGE_MANAGER])
    except CommandFailedError as e:
        logger.debug("Global yarn install failed: %s", e.reason)
        raise ToolMissingError("Failed to install Yarn. Please install it manually.") from e
    console.print("[green]✓[/green] Yarn installed.")
