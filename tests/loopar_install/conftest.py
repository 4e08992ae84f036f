from __future__ import annotations

import io
import subprocess
from dataclasses import dataclass, field
from typing import Callable

import pytest
from rich.console import Console


def make_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=400)


@dataclass
class FakeSubprocess:
    """Stand-in for ``subprocess.run`` that records argv lists."""

    failing: set[tuple[str, ...]] = field(default_factory=set)
    missing: set[str] = field(default_factory=set)
    side_effects: dict[tuple[str, ...], Callable[[list[str]], None]] = field(default_factory=dict)
    calls: list[tuple[list[str], dict]] = field(default_factory=list)

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append((argv, kwargs))
        if argv[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        key = self._match(argv)
        if key in self.side_effects:
            self.side_effects[key](argv)
        returncode = 1 if key in self.failing else 0
        if returncode and kwargs.get("check"):
            raise subprocess.CalledProcessError(returncode, argv)
        return subprocess.CompletedProcess(argv, returncode)

    def _match(self, argv: list[str]) -> tuple[str, ...] | None:
        for candidate in (*self.failing, *self.side_effects):
            if tuple(argv[: len(candidate)]) == candidate:
                return candidate
        return None

    @property
    def argvs(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(tuple(argv[: len(prefix)]) == prefix for argv in self.argvs)


@pytest.fixture()
def fake_subprocess(monkeypatch: pytest.MonkeyPatch) -> FakeSubprocess:
    fake = FakeSubprocess()
    monkeypatch.setattr("loopar_install.core.runner.subprocess.run", fake)
    monkeypatch.setattr("loopar_install.core.runner.shutil.which", lambda name: None)
    return fake


@pytest.fixture()
def console() -> Console:
    return make_console()


@pytest.fixture()
def err_console() -> Console:
    return make_console()
