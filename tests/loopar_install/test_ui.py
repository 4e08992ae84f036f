from __future__ import annotations

from pathlib import Path

from loopar_install.cli.commands.install import run_install
from loopar_install.cli.ui import DONE, ERROR, PENDING, RUNNING, SKIPPED, StepTracker
from loopar_install.core.config import InstallOptions
from loopar_install.core.ports import PortResolution


def test_tracker_updates_and_renders(console):
    tracker = StepTracker("Setup")
    tracker.add("clone", "Fetch template repository")
    tracker.add("clone", "duplicate is ignored")
    tracker.add("port", "Resolve port")

    tracker.skip("clone", "folder exists")
    tracker.start("port")

    assert [s.label for s in tracker.steps] == ["Fetch template repository", "Resolve port"]
    assert tracker.status_of("clone") == SKIPPED
    assert tracker.status_of("port") == RUNNING

    tracker.fail_running("PortUnavailableError")
    assert tracker.status_of("port") == ERROR

    console.print(tracker.render())
    output = console.file.getvalue()
    assert "Fetch template repository (folder exists)" in output
    assert "Resolve port (PortUnavailableError)" in output


def test_tracker_adds_unknown_keys():
    tracker = StepTracker("Setup")
    tracker.complete("extra", "done later")

    assert tracker.get("extra").status == DONE
    assert tracker.status_of("missing") is None


def test_run_install_uses_explicit_cwd(fake_subprocess, console, monkeypatch, tmp_path: Path):
    project = tmp_path / "work" / "demo"
    project.mkdir(parents=True)
    (project / "package.json").write_text('{"scripts": {"dev": "vite"}}', encoding="utf-8")
    monkeypatch.setattr(
        "loopar_install.cli.commands.install.resolve_port",
        lambda requested: PortResolution(requested, requested),
    )
    tracker = StepTracker("Setup")
    for key in ("yarn", "clone", "port", "deps", "launch"):
        tracker.add(key, key)

    run_install(InstallOptions("demo", requested_port=3100, skip_install=True), tracker, console, cwd=tmp_path / "work")

    assert fake_subprocess.argvs == [["yarn", "dev", "--port", "3100"]]
    assert fake_subprocess.calls[0][1]["cwd"] == str(project.resolve())
    assert tracker.status_of("clone") == SKIPPED
    assert tracker.status_of("launch") == DONE
    assert tracker.status_of("yarn") == PENDING
