"""Step tree shown while the project is generated."""

from dataclasses import dataclass
from typing import Callable, Optional

from rich.markup import escape
from rich.tree import Tree

# status -> (symbol, label style)
_STYLES = {
    "pending": ("[green dim]○[/green dim]", "bright_black"),
    "running": ("[cyan]○[/cyan]", "white"),
    "done": ("[green]●[/green]", "white"),
    "error": ("[red]●[/red]", "white"),
    "skipped": ("[yellow]○[/yellow]", "white"),
}


@dataclass
class Step:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Ordered generation steps rendered as a rich tree.

    ``on_change`` is called after every update so a ``Live`` display can
    redraw.
    """

    def __init__(self, title: str, steps: Optional[list[tuple[str, str]]] = None):
        self.title = title
        self.steps: list[Step] = [Step(key, label) for key, label in steps or []]
        self.on_change: Optional[Callable[[], None]] = None

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, "error", detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, "skipped", detail)

    def status(self, key: str) -> str:
        return self._step(key).status

    def _step(self, key: str) -> Step:
        for step in self.steps:
            if step.key == key:
                return step
        raise KeyError(key)

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self._step(key)
        step.status = status
        if detail:
            step.detail = detail
        if self.on_change is not None:
            self.on_change()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{escape(self.title)}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol, style = _STYLES[step.status]
            line = f"{symbol} [{style}]{escape(step.label)}[/{style}]"
            if step.detail:
                line += f" [bright_black]({escape(step.detail.strip())})[/bright_black]"
            tree.add(line)
        return tree
