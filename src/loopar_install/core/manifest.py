"""Reading the target project's ``package.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import MANIFEST_FILE

logger = logging.getLogger(__name__)

__all__ = ["ProjectManifest", "load_manifest"]


@dataclass(frozen=True)
class ProjectManifest:
    """Named launch scripts declared by a project."""

    scripts: dict[str, str] = field(default_factory=dict)

    def has_script(self, name: str) -> bool:
        return name in self.scripts


def load_manifest(project_path: Path) -> ProjectManifest:
    """Load the manifest at *project_path*.

    A missing, unreadable, malformed or pathologically nested file yields
    an empty manifest.
    Non-string script entries are dropped.
    """
    manifest_path = project_path / MANIFEST_FILE
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        logger.debug("Ignoring manifest %s: %s", manifest_path, e)
        return ProjectManifest()

    if not isinstance(data, dict):
        return ProjectManifest()
    raw_scripts = data.get("scripts")
    if not isinstance(raw_scripts, dict):
        return ProjectManifest()

    scripts = {name: command for name, command in raw_scripts.items() if isinstance(command, str)}
    return ProjectManifest(scripts=scripts)
