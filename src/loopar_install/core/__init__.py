"""Core installer steps and configuration exports."""

from .config import DEFAULT_PORT, DEFAULT_REPO, InstallOptions
from .errors import (
    CloneError,
    CommandFailedError,
    InstallerError,
    LaunchError,
    PortUnavailableError,
    ToolMissingError,
)
from .launch import build_launch_plan, launch_dev_server
from .manifest import ProjectManifest, load_manifest
from .ports import PortResolution, normalize_port, resolve_port
from .repository import clone_repository
from .runner import run_command
from .tooling import ensure_package_manager

__all__ = [
    "DEFAULT_PORT",
    "DEFAULT_REPO",
    "InstallOptions",
    "CloneError",
    "CommandFailedError",
    "InstallerError",
    "LaunchError",
    "PortUnavailableError",
    "ToolMissingError",
    "build_launch_plan",
    "launch_dev_server",
    "ProjectManifest",
    "load_manifest",
    "PortResolution",
    "normalize_port",
    "resolve_port",
    "clone_repository",
    "run_command",
    "ensure_package_manager",
]
