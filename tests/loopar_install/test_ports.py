from __future__ import annotations

import socket

import pytest

from loopar_install.core.errors import PortUnavailableError
from loopar_install.core.ports import PortResolution, find_free_port, normalize_port, resolve_port


@pytest.fixture()
def listening_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock
    sock.close()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("8080", 8080),
        ("8080abc", 8080),
        (" 4000", 4000),
        ("0", 3000),
        ("-5", 3000),
        ("abc", 3000),
        ("", 3000),
        (None, 3000),
        (0, 3000),
        (5173, 5173),
    ],
)
def test_normalize_port(value, expected):
    assert normalize_port(value) == expected


def test_find_free_port_skips_listening_port(listening_socket):
    busy = listening_socket.getsockname()[1]

    port = find_free_port(busy)

    assert port > busy


def test_find_free_port_returns_start_when_free(listening_socket):
    # Close the socket to free a known port, then ask for it.
    port = listening_socket.getsockname()[1]
    listening_socket.close()

    assert find_free_port(port) >= port


def test_find_free_port_raises_when_range_exhausted(listening_socket):
    busy = listening_socket.getsockname()[1]

    with pytest.raises(PortUnavailableError, match="Could not find free port"):
        find_free_port(busy, max_attempts=1)


def test_find_free_port_never_exceeds_max_port(monkeypatch):
    monkeypatch.setattr("loopar_install.core.ports._is_listening", lambda host, port: True)

    with pytest.raises(PortUnavailableError, match="65530-65535"):
        find_free_port(65530)


def test_resolve_port_reports_substitution(listening_socket):
    busy = listening_socket.getsockname()[1]

    resolution = resolve_port(busy)

    assert resolution.requested == busy
    assert resolution.port > busy
    assert resolution.substituted


def test_port_resolution_not_substituted():
    assert not PortResolution(requested=3000, port=3000).substituted


def test_find_free_port_scans_past_a_long_busy_run(monkeypatch):
    start = 20000
    monkeypatch.setattr("loopar_install.core.ports._is_listening", lambda host, port: port < start + 150)
    monkeypatch.setattr("loopar_install.core.ports._can_bind", lambda host, port: True)

    assert find_free_port(start) == start + 150
