"""Shared pytest fixtures for the c-init test suite.

Provides:
- A recording render surface and scripted key readers for the menu
- Piped and fake-terminal input sources
- A pre-seeded acutest.h cache so no test touches the network
- A typer CliRunner
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from typer.testing import CliRunner

from c_init.display import PLAIN
from c_init.inputs import InputSource

FAKE_ACUTEST = b"/* acutest stand-in for tests */\n#define TEST_CHECK(cond) ((void)(cond))\n"


class RecordingSurface:
    """RenderSurface that records every call instead of touching a terminal."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.cursor_visible = True

    def clear_lines(self, count: int) -> None:
        self.calls.append(("clear", count))

    def write_line(self, markup: str) -> None:
        self.calls.append(("write", markup))

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible = visible
        self.calls.append(("cursor", visible))

    @property
    def lines(self) -> list[str]:
        return [arg for kind, arg in self.calls if kind == "write"]

    @property
    def clears(self) -> list[int]:
        return [arg for kind, arg in self.calls if kind == "clear"]


class TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


def scripted_keys(*keys: str):
    """Key reader returning the given keys in order."""
    pending = list(keys)

    def read_key() -> str:
        return pending.pop(0)

    return read_key


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def piped():
    """Factory for a non-interactive InputSource fed from a string."""

    def make(text: str = "") -> InputSource:
        return InputSource(stream=io.StringIO(text), output=io.StringIO())

    return make


@pytest.fixture
def tty():
    """Factory for an InputSource that claims to be a terminal."""

    def make(text: str = "") -> InputSource:
        return InputSource(stream=TtyStringIO(text), output=io.StringIO())

    return make


@pytest.fixture
def display():
    return PLAIN


@pytest.fixture
def acutest_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Seed the header cache and point c-init at it."""
    cache = tmp_path / "cache"
    cache.mkdir()
    (cache / "acutest.h").write_bytes(FAKE_ACUTEST)
    monkeypatch.setenv("C_INIT_CACHE_DIR", str(cache))
    return cache


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory that the test runs inside."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def keys():
    return scripted_keys
