"""Interactive wizard filling whatever the command line left unset."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from .display import DisplayOptions, info
from .errors import CancellationError
from .inputs import InputSource
from .menu import TerminalMenu
from .options import CURRENT_DIR, RawOptions
from .scaffold import is_dir_nonempty

WIZARD_TITLE = "--- c-init Interactive Wizard ---"
NAME_PROMPT = "Project Name [.]: "
OVERWRITE_PROMPT = "Folder not empty. Overwrite?"


@dataclass(frozen=True)
class MenuStep:
    """One multiple-choice question bound to a RawOptions field.

    Each choice is a (label, value) pair; a value of ``None`` leaves the
    field unset so later resolution decides it.
    """

    field: str
    prompt: str
    choices: Sequence[tuple[str, Any]]
    default_index: int

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.choices]


MENU_STEPS = (
    MenuStep("cc", "Compiler", (("clang", "clang"), ("gcc", "gcc")), 0),
    MenuStep(
        "strictness",
        "Compiler Strictness",
        (("loose", "loose"), ("strict", "strict"), ("strictest", "strictest")),
        1,
    ),
    MenuStep(
        "linter_strictness",
        "Linter Strictness",
        (
            ("(same as strictness)", None),
            ("loose", "loose"),
            ("strict", "strict"),
            ("strictest", "strictest"),
        ),
        0,
    ),
    MenuStep("skip_git", "Run git init?", (("No", True), ("Yes", False)), 1),
    MenuStep("skip_tests", "Generate tests?", (("No", True), ("Yes", False)), 1),
)


class WizardController:
    def __init__(
        self,
        display: DisplayOptions,
        menu: Optional[TerminalMenu] = None,
        source: Optional[InputSource] = None,
        dir_nonempty: Callable[[Path], bool] = is_dir_nonempty,
    ):
        self.display = display
        self.source = source if source is not None else InputSource()
        self.menu = menu if menu is not None else TerminalMenu(display, self.source)
        self.dir_nonempty = dir_nonempty

    def run(self, raw: RawOptions) -> RawOptions:
        """Ask about every field still unset, in a fixed order.

        Raises CancellationError when the user declines to overwrite a
        non-empty target directory.
        """
        info(self.display, WIZARD_TITLE)
        info(self.display)

        raw = self.ask_path(raw)
        raw = self.confirm_overwrite(raw)
        for step in MENU_STEPS:
            if raw.is_set(step.field):
                continue
            index = self.menu.select(step.prompt, step.labels, step.default_index)
            _, value = step.choices[index]
            raw = raw.fill_unset(**{step.field: value})

        info(self.display)
        return raw

    def ask_path(self, raw: RawOptions) -> RawOptions:
        if raw.name or raw.path:
            return raw
        entry = self.source.read_line(NAME_PROMPT).strip()
        if entry and entry != CURRENT_DIR:
            return raw.fill_unset(path=entry)
        return raw

    def confirm_overwrite(self, raw: RawOptions) -> RawOptions:
        if raw.is_set("force"):
            return raw
        target = Path(raw.path or CURRENT_DIR)
        if not self.dir_nonempty(target):
            return raw
        if self.menu.select(OVERWRITE_PROMPT, ["No", "Yes"], 0) == 1:
            return raw.fill_unset(force=True)
        raise CancellationError("Exiting...")
