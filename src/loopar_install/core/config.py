"""Static configuration for the installer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

DEFAULT_REPO = "https://github.com/alphabit-technology/loopar-framework.git"
DEFAULT_PORT = 3000

PACKAGE_MANAGER = "yarn"
FALLBACK_INSTALLER = "npm"
PACKAGE_RUNNER = "npx"
BUNDLER = "vite"
VCS_CLIENT = "git"

MANIFEST_FILE = "package.json"

PORT_ENV_VAR = "PORT"
DEV_MODE_ENV: Mapping[str, str] = MappingProxyType({"NODE_ENV": "development"})

__all__ = [
    "DEFAULT_REPO",
    "DEFAULT_PORT",
    "PACKAGE_MANAGER",
    "FALLBACK_INSTALLER",
    "PACKAGE_RUNNER",
    "BUNDLER",
    "VCS_CLIENT",
    "MANIFEST_FILE",
    "PORT_ENV_VAR",
    "DEV_MODE_ENV",
    "InstallOptions",
    "dev_server_env",
]


@dataclass(frozen=True)
class InstallOptions:
    """Options for a single installer run."""

    folder_name: str
    requested_port: int = DEFAULT_PORT
    skip_install: bool = False

    def target_path(self, cwd: Path | None = None) -> Path:
        """Absolute path the project lives at."""
        base = cwd if cwd is not None else Path.cwd()
        return (base / self.folder_name).resolve()


def dev_server_env(port: int) -> Mapping[str, str]:
    """Environment overrides handed to the dev server process."""
    return MappingProxyType({PORT_ENV_VAR: str(port), **DEV_MODE_ENV})
