"""Port selection for the dev server."""

from __future__ import annotations

import logging
import re
import socket
from dataclasses import dataclass

from .config import DEFAULT_PORT
from .errors import PortUnavailableError

logger = logging.getLogger(__name__)

MAX_PORT = 65535

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

__all__ = ["PortResolution", "normalize_port", "find_free_port", "resolve_port"]


@dataclass(frozen=True)
class PortResolution:
    """Requested port and the port actually chosen."""

    requested: int
    port: int

    @property
    def substituted(self) -> bool:
        return self.port != self.requested


def normalize_port(value: str | int | None, default: int = DEFAULT_PORT) -> int:
    """Parse a user-supplied port, falling back to *default*.

    Leading digits are honoured and trailing text ignored (``"8080abc"`` is
    8080). Missing, non-numeric, zero and negative values yield *default*.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    port = int(match.group(1))
    return port if port > 0 else default


def _is_listening(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.settimeout(0.1)
        try:
            return sock.connect_ex((host, port)) == 0
        except OSError:
            return False


def _can_bind(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def find_free_port(start_port: int, max_attempts: int | None = None, host: str = "127.0.0.1") -> int:
    """
    Find the first available port at or above start_port.

    Uses a dual check: a connection test to detect an existing server, then
    a bind test to make sure the port can actually be used.

    Args:
        start_port: First port to try
        max_attempts: Maximum number of ports to try (default: every port up to 65535)
        host: Interface to probe

    Returns:
        First available port number

    Raises:
        PortUnavailableError: If no free port is found in the range
    """
    end_port = MAX_PORT + 1
    if max_attempts is not None:
        end_port = min(start_port + max_attempts, end_port)
    for port in range(start_port, end_port):
        if _is_listening(host, port):
            logger.debug("Port %s has a listener", port)
            continue
        if _can_bind(host, port):
            return port
        logger.debug("Port %s cannot be bound", port)

    raise PortUnavailableError(f"Could not find free port in range {start_port}-{end_port - 1}")


def resolve_port(requested: int) -> PortResolution:
    """Resolve the nearest free port at or above *requested*."""
    port = find_free_port(requested)
    return PortResolution(requested=requested, port=port)
