"""Configuration records: raw CLI options and the resolved configuration."""

import string
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Optional


class Compiler(str, Enum):
    CLANG = "clang"
    GCC = "gcc"


class Strictness(str, Enum):
    LOOSE = "loose"
    STRICT = "strict"
    STRICTEST = "strictest"


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class FieldState(Enum):
    SET = "set"
    UNSET = "unset"
    INVALID = "invalid"


# Fields whose raw value must be a member of an enumeration
ENUM_FIELDS = {
    "cc": Compiler,
    "strictness": Strictness,
    "linter_strictness": Strictness,
    "color": ColorMode,
}

CURRENT_DIR = "."

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass(frozen=True)
class RawOptions:
    """Options as given on the command line, one optional value per flag.

    ``None`` means the flag was not given. Boolean toggles can only be
    switched on from the command line, so they are either ``True`` or unset
    until the wizard or the default fill decides them.
    """

    name: Optional[str] = None
    path: Optional[str] = None
    cc: Optional[str] = None
    strictness: Optional[str] = None
    linter_strictness: Optional[str] = None
    color: Optional[str] = None
    force: Optional[bool] = None
    skip_git: Optional[bool] = None
    skip_commit: Optional[bool] = None
    skip_hello: Optional[bool] = None
    skip_tests: Optional[bool] = None
    interactive: bool = False

    def state_of(self, field_name: str) -> FieldState:
        value = getattr(self, field_name)
        if value is None:
            return FieldState.UNSET
        choices = ENUM_FIELDS.get(field_name)
        if choices is not None and value not in {member.value for member in choices}:
            return FieldState.INVALID
        return FieldState.SET

    def is_set(self, field_name: str) -> bool:
        return self.state_of(field_name) is not FieldState.UNSET

    def fill_unset(self, **values) -> "RawOptions":
        """Return a copy where each given field is applied only if still unset."""
        known = {f.name for f in fields(self)}
        updates = {}
        for key, value in values.items():
            if key not in known:
                raise TypeError(f"unknown option field: {key}")
            if value is not None and getattr(self, key) is None:
                updates[key] = value
        return replace(self, **updates) if updates else self


def slugify(name: str) -> str:
    """Lowercase ASCII letters and turn spaces into underscores."""
    return name.translate(_ASCII_LOWER).replace(" ", "_")


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully validated configuration handed to the renderer and writer."""

    name: str
    path: str
    compiler: Compiler
    actual_compiler: str
    strictness: Strictness
    linter_strictness: Strictness
    color: bool = False
    force: bool = False
    skip_git: bool = False
    skip_commit: bool = False
    skip_hello: bool = False
    skip_tests: bool = False

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def target(self) -> Path:
        return Path(self.path)

    @property
    def is_current_dir(self) -> bool:
        return self.path == CURRENT_DIR
