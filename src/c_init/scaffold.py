"""Filesystem and git side of project generation."""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

PROJECT_DIRS = ("src", "include", "target")
GITIGNORE = "target/\n"
INITIAL_COMMIT_MESSAGE = "init"


@dataclass(frozen=True)
class RenderedFile:
    path: str
    content: str


@dataclass(frozen=True)
class GitResult:
    status: str  # "initialized", "committed", "existing", "unavailable", "failed"
    detail: str = ""


def is_dir_nonempty(path: Path) -> bool:
    """True only for an existing, readable directory with at least one entry.

    A directory that cannot be listed counts as empty; writing into it then
    fails with a proper error.
    """
    path = Path(path)
    try:
        return path.is_dir() and any(path.iterdir())
    except OSError:
        return False


def write_file(path: Path, contents) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(contents, bytes):
        path.write_bytes(contents)
    else:
        path.write_text(contents, encoding="utf-8")


def write_project(root: Path, files: Iterable[RenderedFile], header: Optional[bytes] = None, header_path: Optional[str] = None) -> list[Path]:
    """Create the project skeleton under ``root`` and write every rendered file.

    Returns the paths written, in order. ``header`` is the vendored test
    header, written verbatim to ``header_path``.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name in PROJECT_DIRS:
        (root / name).mkdir(exist_ok=True)

    written: list[Path] = []
    for rendered in files:
        target = root / rendered.path
        write_file(target, rendered.content)
        written.append(target)
    if header is not None and header_path:
        target = root / header_path
        write_file(target, header)
        written.append(target)
    return written


def check_tool(tool: str) -> bool:
    """Check if a tool is installed."""
    return shutil.which(tool) is not None


def init_git_repo(project_path: Path, commit: bool = True) -> GitResult:
    """Initialize a git repository, write .gitignore and optionally commit.

    A repository that already exists is left alone. Commit failures (no
    user identity configured, for instance) do not undo the init.
    """
    if (project_path / ".git").exists():
        return GitResult("existing", "existing repo detected")
    if not check_tool("git"):
        return GitResult("unavailable", "git not found")

    try:
        subprocess.run(["git", "init", "-q"], check=True, capture_output=True, cwd=project_path)
    except (subprocess.CalledProcessError, OSError) as e:
        return GitResult("failed", f"git init failed: {e}")

    write_file(project_path / ".gitignore", GITIGNORE)
    if not commit:
        return GitResult("initialized", "initialized")

    try:
        subprocess.run(["git", "add", "-A"], check=True, capture_output=True, cwd=project_path)
        subprocess.run(
            ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
            check=True,
            capture_output=True,
            cwd=project_path,
        )
    except (subprocess.CalledProcessError, OSError):
        return GitResult("initialized", "initialized, initial commit skipped")
    return GitResult("committed", "initialized with initial commit")
