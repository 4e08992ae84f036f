"""The ``install`` command: clone, prepare and launch a Loopar project."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from loopar_install.cli.ui import RUNNING, StepTracker
from loopar_install.core.config import DEFAULT_REPO, PACKAGE_MANAGER, InstallOptions
from loopar_install.core.errors import InstallerError
from loopar_install.core.launch import launch_dev_server
from loopar_install.core.manifest import load_manifest
from loopar_install.core.ports import normalize_port, resolve_port
from loopar_install.core.repository import clone_repository
from loopar_install.core.runner import run_command
from loopar_install.core.tooling import ensure_package_manager

logger = logging.getLogger(__name__)

__all__ = ["register_install_command", "run_install"]


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _path_exists(path: Path) -> bool:
    # Errors such as ENAMETOOLONG or EACCES count as absent; git reports them.
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return False


def _new_tracker(options: InstallOptions) -> StepTracker:
    tracker = StepTracker("Loopar Setup")
    tracker.add("yarn", "Check package manager")
    tracker.add("clone", "Fetch template repository")
    tracker.add("port", "Resolve port")
    tracker.add("deps", "Install dependencies")
    tracker.add("launch", "Start dev server")
    if options.skip_install:
        tracker.skip("yarn", "--skip-install")
    return tracker


def run_install(
    options: InstallOptions,
    tracker: StepTracker,
    console: Console,
    cwd: Path | None = None,
) -> None:
    """Run every installer step in order.

    Raises:
        InstallerError: From the first step that fails; later steps do not run.
    """
    if not options.skip_install:
        tracker.start("yarn")
        ensure_package_manager(console)
        tracker.complete("yarn", "available")

    target_path = options.target_path(cwd)

    if _path_exists(target_path):
        console.print(f"Folder already exists: [cyan]{target_path}[/cyan]. Skipping clone.")
        tracker.skip("clone", "folder exists")
    else:
        console.print(f"Folder does not exist. Cloning {DEFAULT_REPO} into [cyan]{target_path}[/cyan]...")
        tracker.start("clone")
        clone_repository(DEFAULT_REPO, target_path)
        tracker.complete("clone", str(target_path))

    console.print(f"Checking availability for port {options.requested_port}...")
    tracker.start("port")
    resolution = resolve_port(options.requested_port)
    if resolution.substituted:
        console.print(
            f"[yellow]Port {resolution.requested} is already in use.[/yellow] "
            f"Using port {resolution.port} instead."
        )
    else:
        console.print(f"Port {resolution.requested} is available.")
    tracker.complete("port", str(resolution.port))

    if options.skip_install:
        console.print("Skipping dependency installation (--skip-install).")
        tracker.skip("deps", "--skip-install")
    else:
        console.print("Installing dependencies with yarn...")
        tracker.start("deps")
        run_command([PACKAGE_MANAGER, "install"], cwd=target_path)
        tracker.complete("deps")

    manifest = load_manifest(target_path)
    tracker.start("launch", f"port {resolution.port}")
    console.print(tracker.render())
    console.print(f"[cyan]Starting in development mode on port {resolution.port}...[/cyan]")
    strategy = launch_dev_server(target_path, resolution.port, manifest=manifest, console=console)
    tracker.complete("launch", strategy.name)


def register_install_command(
    app: typer.Typer,
    *,
    console: Console,
    err_console: Console,
    version: str,
) -> None:
    """Register the install command on the provided Typer app."""

    def version_callback(value: bool) -> None:
        if value:
            console.print(f"loopar-install {version}")
            raise typer.Exit()

    @app.command()
    def install(
        folder_name: str = typer.Argument(..., metavar="FOLDER_NAME", help="Name of the folder to create or use if it exists"),
        port: str = typer.Option("3000", "--port", "-p", help="Preconfigured port number"),
        skip_install: bool = typer.Option(False, "--skip-install", help="Skip running yarn install (useful for fast tests)"),
        debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
        show_version: bool = typer.Option(
            False,
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show the installer version and exit",
        ),
    ):
        """
        Clone the Loopar template into FOLDER_NAME and start it in development mode.

        Examples:
            loopar-install myapp
            loopar-install myapp --port 8080 --skip-install
        """
        _configure_logging(debug)

        options = InstallOptions(
            folder_name=folder_name,
            requested_port=normalize_port(port),
            skip_install=skip_install,
        )
        logger.debug("Install options: %s", options)

        console.print(
            Panel(
                f"{'Project':<15} [green]{folder_name}[/green]\n"
                f"{'Working Path':<15} [dim]{Path.cwd()}[/dim]",
                title="[cyan]Loopar Install[/cyan]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

        tracker = _new_tracker(options)
        try:
            run_install(options, tracker, console)
        except KeyboardInterrupt:
            if tracker.status_of("launch") == RUNNING:
                console.print("\n[yellow]Dev server stopped[/yellow]")
                raise typer.Exit(130)
            console.print("\n[yellow]Installation cancelled[/yellow]")
            raise typer.Exit(1)
        except InstallerError as e:
            tracker.fail_running(type(e).__name__)
            console.print(tracker.render())
            err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
            raise typer.Exit(1)
