"""Exception hierarchy for the installer.

Every exception here is fatal to the CLI: the ``install`` command catches
``InstallerError``, prints its message and exits with status 1.
"""

from __future__ import annotations

__all__ = [
    "InstallerError",
    "CommandFailedError",
    "ToolMissingError",
    "CloneError",
    "PortUnavailableError",
    "LaunchError",
]


class InstallerError(Exception):
    """Base class for installer failures."""


class CommandFailedError(InstallerError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f'Command failed: "{command}"\n{reason}')


class ToolMissingError(InstallerError):
    """A required external tool (git, yarn) is not callable."""


class CloneError(InstallerError):
    """Cloning the template repository failed."""


class PortUnavailableError(InstallerError):
    """No free port could be found in the probed range."""


class LaunchError(InstallerError):
    """No launch strategy could start the dev server."""
