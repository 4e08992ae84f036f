#!/usr/bin/env python3
"""
Loopar installer - bootstrap a Loopar project and start its dev server.

Usage:
    loopar-install <folder-name>
    loopar-install <folder-name> --port 8080
    loopar-install <folder-name> --skip-install
"""

import typer
from rich.console import Console

from loopar_install.cli.commands.install import register_install_command

__version__ = "0.1.0"

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="loopar-install",
    help="Clone, prepare and launch a Loopar project in development mode",
    add_completion=False,
)

register_install_command(app, console=console, err_console=err_console, version=__version__)


def main():
    app()


if __name__ == "__main__":
    main()
