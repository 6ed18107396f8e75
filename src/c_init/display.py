"""Console output helpers.

Color is never global state: every helper takes the ``DisplayOptions`` that
were resolved from ``--color`` and builds its console from it.
"""

from dataclasses import dataclass
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class DisplayOptions:
    color: bool = False


PLAIN = DisplayOptions(color=False)


def make_console(display: DisplayOptions, *, stderr: bool = False, file: Optional[TextIO] = None) -> Console:
    """Build a console honoring the resolved color setting.

    The stream is looked up at print time when ``file`` is omitted, so
    consoles stay valid when ``sys.stdout`` is swapped (test runners do this).
    """
    if display.color:
        return Console(
            file=file,
            stderr=stderr,
            force_terminal=True,
            color_system="standard",
            highlight=False,
            soft_wrap=True,
        )
    return Console(
        file=file,
        stderr=stderr,
        color_system=None,
        highlight=False,
        soft_wrap=True,
    )


def error(display: DisplayOptions, message: str) -> None:
    make_console(display, stderr=True).print(f"[red]Error:[/red] {escape(message)}")


def warn(display: DisplayOptions, message: str) -> None:
    make_console(display, stderr=True).print(f"[yellow]Warning:[/yellow] {message}")


def info(display: DisplayOptions, message: str = "") -> None:
    make_console(display).print(message)


def success(text: str) -> str:
    return f"[green]{escape(text)}[/green]"


def muted(text: str) -> str:
    return f"[bright_black]{escape(text)}[/bright_black]"
