"""Rich helpers for reporting installer progress."""

from __future__ import annotations

from dataclasses import dataclass

from rich.tree import Tree

PENDING = "pending"
RUNNING = "running"
DONE = "done"
ERROR = "error"
SKIPPED = "skipped"

_SYMBOLS = {
    DONE: "[green]●[/green]",
    PENDING: "[green dim]○[/green dim]",
    RUNNING: "[cyan]○[/cyan]",
    ERROR: "[red]●[/red]",
    SKIPPED: "[yellow]○[/yellow]",
}


@dataclass
class Step:
    key: str
    label: str
    status: str = PENDING
    detail: str = ""


class StepTracker:
    """Track installer steps and render them as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[Step] = []

    def add(self, key: str, label: str) -> None:
        if self.get(key) is None:
            self.steps.append(Step(key=key, label=label))

    def get(self, key: str) -> Step | None:
        for step in self.steps:
            if step.key == key:
                return step
        return None

    def status_of(self, key: str) -> str | None:
        step = self.get(key)
        return step.status if step else None

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, RUNNING, detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, DONE, detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, ERROR, detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, SKIPPED, detail)

    def fail_running(self, detail: str = "") -> None:
        """Mark whichever step is currently running as failed."""
        for step in self.steps:
            if step.status == RUNNING:
                self._update(step.key, ERROR, detail)

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self.get(key)
        if step is None:
            step = Step(key=key, label=key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            detail_text = step.detail.strip()
            if step.status == PENDING:
                body = f"{step.label} ({detail_text})" if detail_text else step.label
                line = f"{symbol} [bright_black]{body}[/bright_black]"
            elif detail_text:
                line = f"{symbol} [white]{step.label}[/white] [bright_black]({detail_text})[/bright_black]"
            else:
                line = f"{symbol} [white]{step.label}[/white]"
            tree.add(line)
        return tree
