"""Arrow-key menu used by the interactive wizard."""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

import readchar
from rich.console import Console
from rich.control import Control, ControlType
from rich.markup import escape

from .display import DisplayOptions, make_console
from .inputs import InputSource

_INDEX_RE = re.compile(r"[0-9]+")


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP:
        return "up"
    if key == readchar.key.DOWN:
        return "down"

    if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
        return "enter"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


class RenderSurface(Protocol):
    """The few terminal operations the menu needs."""

    def clear_lines(self, count: int) -> None: ...

    def write_line(self, markup: str) -> None: ...

    def set_cursor_visible(self, visible: bool) -> None: ...


class ConsoleSurface:
    """RenderSurface backed by a rich console."""

    def __init__(self, console: Console):
        self.console = console

    def clear_lines(self, count: int) -> None:
        for _ in range(count):
            self.console.control(Control.move(0, -1), Control((ControlType.ERASE_IN_LINE, 2)))
        self.console.control(Control.move_to_column(0))

    def write_line(self, markup: str) -> None:
        self.console.print(markup)

    def set_cursor_visible(self, visible: bool) -> None:
        self.console.show_cursor(visible)


@dataclass
class MenuState:
    options: Sequence[str]
    index: int = 0
    cursor_visible: bool = True

    def move_up(self) -> None:
        if self.index > 0:
            self.index -= 1

    def move_down(self) -> None:
        if self.index < len(self.options) - 1:
            self.index += 1

    @property
    def selection(self) -> str:
        return self.options[self.index]


class TerminalMenu:
    """Single-choice menu with a non-interactive fallback.

    When stdin is not a terminal, one line is read and taken as the index of
    the choice; anything unusable falls back to the default. On a terminal
    the options are drawn with the current one inverted and navigated with
    the arrow keys. The index never wraps around.
    """

    def __init__(
        self,
        display: DisplayOptions,
        source: Optional[InputSource] = None,
        surface: Optional[RenderSurface] = None,
        read_key: Callable[[], str] = get_key,
    ):
        self.display = display
        self.source = source if source is not None else InputSource()
        self.surface = surface if surface is not None else ConsoleSurface(make_console(display))
        self.read_key = read_key

    def select(self, prompt: str, options: Sequence[str], default_index: int = 0) -> int:
        if not options:
            raise ValueError("menu needs at least one option")
        if not 0 <= default_index < len(options):
            raise ValueError(f"default index {default_index} out of range for {len(options)} options")

        state = MenuState(options=list(options), index=default_index)
        if not self.source.interactive:
            return self._select_piped(prompt, state)
        return self._select_interactive(prompt, state)

    def _select_piped(self, prompt: str, state: MenuState) -> int:
        line = self.source.read_line(interactive=False).strip()
        if _INDEX_RE.fullmatch(line) and int(line) < len(state.options):
            state.index = int(line)
        self.surface.write_line(
            f"{escape(prompt)}: [green]{escape(state.selection)}[/green] (non-interactive)"
        )
        return state.index

    def _select_interactive(self, prompt: str, state: MenuState) -> int:
        block_height = len(state.options) + 1
        self._set_cursor(state, False)
        try:
            self._draw(prompt, state)
            while True:
                key = self.read_key()
                if key == "enter":
                    break
                if key == "up":
                    state.move_up()
                elif key == "down":
                    state.move_down()
                self.surface.clear_lines(block_height)
                self._draw(prompt, state)
            self.surface.clear_lines(block_height)
        finally:
            self._set_cursor(state, True)

        self.surface.write_line(f"{escape(prompt)}: [green]{escape(state.selection)}[/green]")
        return state.index

    def _draw(self, prompt: str, state: MenuState) -> None:
        self.surface.write_line(f"{escape(prompt)}:")
        for i, option in enumerate(state.options):
            if i == state.index:
                self.surface.write_line(f"[reverse]> {escape(option)}[/reverse]")
            else:
                self.surface.write_line(f"  {escape(option)}")

    def _set_cursor(self, state: MenuState, visible: bool) -> None:
        self.surface.set_cursor_visible(visible)
        state.cursor_visible = visible
