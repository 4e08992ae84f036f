"""Selection and execution of the dev-server launch command.

The launch plan is an ordered list of strategies built from the project's
manifest. Strategies run in order and the first one that succeeds ends the
plan. Only strategies marked ``fall_through`` let a failure move on to the
next candidate; any other failure propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from rich.console import Console

from .config import BUNDLER, PACKAGE_MANAGER, PACKAGE_RUNNER, dev_server_env
from .errors import CommandFailedError, LaunchError
from .manifest import ProjectManifest, load_manifest
from .runner import run_command

logger = logging.getLogger(__name__)

__all__ = ["LaunchStrategy", "build_launch_plan", "launch_dev_server"]

NO_LAUNCH_METHOD = (
    'Could not start dev server: no "dev" script and vite invocation failed. '
    "Inspect project scripts."
)


@dataclass(frozen=True)
class LaunchStrategy:
    """One way of starting the dev server."""

    name: str
    base_command: tuple[str, ...]
    pass_port: bool = True
    fall_through: bool = False
    fallback_notice: str | None = None

    def command(self, port: int) -> list[str]:
        argv = list(self.base_command)
        if self.pass_port:
            argv += ["--port", str(port)]
        return argv


DEV_SCRIPT = LaunchStrategy(name="dev", base_command=(PACKAGE_MANAGER, "dev"))
BUNDLER_DEV = LaunchStrategy(
    name=BUNDLER,
    base_command=(PACKAGE_RUNNER, BUNDLER),
    fall_through=True,
)
START_SCRIPT = LaunchStrategy(
    name="start",
    base_command=(PACKAGE_MANAGER, "start"),
    pass_port=False,
    fallback_notice='npx vite failed and package.json has "start". Falling back to `yarn start`.',
)


def build_launch_plan(manifest: ProjectManifest) -> list[LaunchStrategy]:
    """Order the launch strategies available for *manifest*."""
    if manifest.has_script("dev"):
        return [DEV_SCRIPT]
    plan = [BUNDLER_DEV]
    if manifest.has_script("start"):
        plan.append(START_SCRIPT)
    return plan


def _run_strategy(strategy: LaunchStrategy, project_path: Path, port: int, env: Mapping[str, str]) -> None:
    logger.debug("Launch strategy %s", strategy.name)
    run_command(strategy.command(port), cwd=project_path, env=env)


def launch_dev_server(
    project_path: Path,
    port: int,
    manifest: ProjectManifest | None = None,
    console: Console | None = None,
) -> LaunchStrategy:
    """Start the dev server for *project_path* on *port*.

    Blocks for the lifetime of the launched process.

    Returns:
        The strategy that ran successfully.

    Raises:
        CommandFailedError: If a strategy that does not fall through fails.
        LaunchError: If every candidate was exhausted.
    """
    console = console or Console()
    if manifest is None:
        manifest = load_manifest(project_path)
    env = dev_server_env(port)

    previous_failed = False
    for strategy in build_launch_plan(manifest):
        if previous_failed and strategy.fallback_notice:
            console.print(f"[yellow]{strategy.fallback_notice}[/yellow]")
        try:
            _run_strategy(strategy, project_path, port, env)
        except CommandFailedError as e:
            if not strategy.fall_through:
                raise
            logger.debug("Strategy %s failed, trying next: %s", strategy.name, e.reason)
            previous_failed = True
            continue
        return strategy

    raise LaunchError(NO_LAUNCH_METHOD)
