"""Turn raw options into a validated ``ResolvedConfig``.

Every field follows the same precedence: an explicit flag wins, then a
wizard answer, then the built-in default. The wizard runs outside this
module and hands back a ``RawOptions`` with more fields filled in; the
resolver only ever fills what is still unset.
"""

import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional

from .display import DisplayOptions
from .errors import HelpRequested, ValidationError
from .options import (
    CURRENT_DIR,
    ColorMode,
    Compiler,
    FieldState,
    RawOptions,
    ResolvedConfig,
    Strictness,
)
from .scaffold import is_dir_nonempty

DEFAULTS = {
    "path": CURRENT_DIR,
    "cc": Compiler.CLANG.value,
    "strictness": Strictness.STRICT.value,
    "color": ColorMode.AUTO.value,
    "force": False,
    "skip_git": False,
    "skip_commit": False,
    "skip_hello": False,
    "skip_tests": False,
}

HELP_TOKEN = "help"
FALLBACK_NAME = "project"

# Real GCC builds installed next to Apple's clang-backed ``gcc`` shim
MACOS_GCC_CANDIDATES = ("gcc-15", "gcc-14", "gcc-13")

_ENUM_MESSAGES = {
    "cc": "--cc must be clang or gcc",
    "strictness": "--strictness must be loose, strict, or strictest",
    "linter_strictness": "--linter-strictness must be loose, strict, or strictest",
    "color": "--color must be auto, always, or never",
}


def resolve_color(mode: str, is_tty: bool) -> bool:
    if mode == ColorMode.ALWAYS.value:
        return True
    if mode == ColorMode.NEVER.value:
        return False
    return is_tty


def _stdout_isatty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class ConfigResolver:
    """Apply defaults and validate, in a fixed order.

    ``platform``, ``which`` and ``cwd`` are injectable so platform-specific
    compiler probing, current-directory naming and relative target checks
    can be exercised anywhere.
    """

    def __init__(
        self,
        *,
        platform: Optional[str] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        cwd: Optional[Path] = None,
        stdout_isatty: Callable[[], bool] = _stdout_isatty,
    ):
        self.platform = platform if platform is not None else sys.platform
        self.which = which
        self.cwd = cwd
        self.stdout_isatty = stdout_isatty

    def resolve_display(self, raw: RawOptions) -> DisplayOptions:
        """Resolve ``--color`` first; every later message depends on it."""
        mode = raw.color if raw.color is not None else DEFAULTS["color"]
        if raw.state_of("color") is FieldState.INVALID:
            raise ValidationError(_ENUM_MESSAGES["color"])
        return DisplayOptions(color=resolve_color(mode, self.stdout_isatty()))

    def apply_defaults(self, raw: RawOptions) -> RawOptions:
        return raw.fill_unset(**DEFAULTS)

    def check_help(self, raw: RawOptions) -> None:
        """Raise HelpRequested for the reserved ``help`` path without ``--name``.

        Runs before the wizard and before any directory is inspected.
        """
        if raw.path == HELP_TOKEN and not raw.name:
            raise HelpRequested()

    def resolve(self, raw: RawOptions, display: Optional[DisplayOptions] = None) -> ResolvedConfig:
        if display is None:
            display = self.resolve_display(raw)
        raw = self.apply_defaults(raw)

        self.check_help(raw)

        for field_name in ("cc", "strictness", "linter_strictness"):
            if raw.state_of(field_name) is FieldState.INVALID:
                raise ValidationError(_ENUM_MESSAGES[field_name])

        compiler = Compiler(raw.cc)
        strictness = Strictness(raw.strictness)
        if raw.linter_strictness is None:
            linter_strictness = strictness
        else:
            linter_strictness = Strictness(raw.linter_strictness)

        path = raw.path or CURRENT_DIR
        name = raw.name or self.derive_name(path)

        target = Path(path) if self.cwd is None else self.cwd / path
        if target.exists() and not target.is_dir():
            raise ValidationError(f"{path} exists and is not a directory")
        if is_dir_nonempty(target) and not raw.force:
            raise ValidationError(f"The folder {path} is not empty (use --force to proceed)")

        return ResolvedConfig(
            name=name,
            path=path,
            compiler=compiler,
            actual_compiler=self.actual_compiler(compiler),
            strictness=strictness,
            linter_strictness=linter_strictness,
            color=display.color,
            force=bool(raw.force),
            skip_git=bool(raw.skip_git),
            skip_commit=bool(raw.skip_commit),
            skip_hello=bool(raw.skip_hello),
            skip_tests=bool(raw.skip_tests),
        )

    def derive_name(self, path: str) -> str:
        if path == CURRENT_DIR:
            name = (self.cwd or Path.cwd()).name
        else:
            name = os.path.basename(os.path.normpath(path))
        if not name or name in (".", "..", os.sep):
            return FALLBACK_NAME
        return name

    def actual_compiler(self, compiler: Compiler) -> str:
        """Pick the binary written to the Makefile.

        On macOS ``gcc`` is usually clang in disguise, so prefer a
        versioned GCC when one is installed.
        """
        if compiler is Compiler.GCC and self.platform == "darwin":
            for candidate in MACOS_GCC_CANDIDATES:
                if self.which(candidate):
                    return candidate
        return compiler.value
