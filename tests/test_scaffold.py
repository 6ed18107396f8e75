"""Unit tests for filesystem and git helpers (c_init.scaffold)."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from c_init import scaffold
from c_init.scaffold import RenderedFile, init_git_repo, is_dir_nonempty, write_project

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


class TestIsDirNonempty:
    @pytest.mark.unit
    def test_missing_path(self, tmp_path: Path):
        assert is_dir_nonempty(tmp_path / "nope") is False

    @pytest.mark.unit
    def test_empty_dir(self, tmp_path: Path):
        assert is_dir_nonempty(tmp_path) is False

    @pytest.mark.unit
    def test_hidden_entry_counts(self, tmp_path: Path):
        (tmp_path / ".keep").write_text("")
        assert is_dir_nonempty(tmp_path) is True

    @pytest.mark.unit
    def test_regular_file(self, tmp_path: Path):
        afile = tmp_path / "f"
        afile.write_text("x")
        assert is_dir_nonempty(afile) is False


class TestWriteProject:
    @pytest.mark.unit
    def test_creates_skeleton_and_files(self, tmp_path: Path):
        root = tmp_path / "proj"
        files = [RenderedFile("Makefile", "all:\n"), RenderedFile("tests/test_basic.c", "int x;\n")]
        written = write_project(root, files, header=b"/* h */", header_path="tests/test-deps/acutest.h")

        for name in ("src", "include", "target"):
            assert (root / name).is_dir()
        assert (root / "Makefile").read_text() == "all:\n"
        assert (root / "tests" / "test-deps" / "acutest.h").read_bytes() == b"/* h */"
        assert written == [
            root / "Makefile",
            root / "tests" / "test_basic.c",
            root / "tests" / "test-deps" / "acutest.h",
        ]

    @pytest.mark.unit
    def test_overwrites_existing_files(self, tmp_path: Path):
        (tmp_path / "Makefile").write_text("old")
        (tmp_path / "notes.txt").write_text("keep me")
        write_project(tmp_path, [RenderedFile("Makefile", "new")])
        assert (tmp_path / "Makefile").read_text() == "new"
        assert (tmp_path / "notes.txt").read_text() == "keep me"

    @pytest.mark.unit
    def test_no_header_without_path(self, tmp_path: Path):
        written = write_project(tmp_path, [], header=b"ignored")
        assert written == []
        assert not (tmp_path / "tests").exists()


class TestInitGitRepo:
    @pytest.mark.unit
    def test_existing_repo_left_alone(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        result = init_git_repo(tmp_path)
        assert result.status == "existing"
        assert not (tmp_path / ".gitignore").exists()

    @pytest.mark.unit
    def test_missing_git(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(scaffold, "check_tool", lambda tool: False)
        assert init_git_repo(tmp_path).status == "unavailable"
        assert not (tmp_path / ".git").exists()

    @pytest.mark.integration
    @requires_git
    def test_init_without_commit(self, tmp_path: Path):
        result = init_git_repo(tmp_path, commit=False)
        assert result.status == "initialized"
        assert (tmp_path / ".git").is_dir()
        assert (tmp_path / ".gitignore").read_text() == "target/\n"

    @pytest.mark.integration
    @requires_git
    def test_init_with_commit(self, tmp_path: Path, monkeypatch):
        for key, value in {
            "GIT_AUTHOR_NAME": "Test",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@example.com",
        }.items():
            monkeypatch.setenv(key, value)
        (tmp_path / "Makefile").write_text("all:\n")

        result = init_git_repo(tmp_path)

        assert result.status in ("committed", "initialized")
        if result.status == "committed":
            log = subprocess.run(
                ["git", "log", "--format=%s"], cwd=tmp_path, capture_output=True, text=True, check=True
            )
            assert log.stdout.strip() == "init"


class TestUnreadableDirectory:
    @pytest.mark.unit
    def test_listing_error_counts_as_empty(self, tmp_path: Path, monkeypatch):
        (tmp_path / "file.c").write_text("")

        def unreadable(self):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "iterdir", unreadable)
        assert is_dir_nonempty(tmp_path) is False
