"""CLI command modules for loopar-install."""

from .install import register_install_command, run_install

__all__ = ["register_install_command", "run_install"]
