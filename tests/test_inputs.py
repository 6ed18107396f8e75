"""Unit tests for c_init.inputs.InputSource."""

from __future__ import annotations

import io

import pytest

from c_init.inputs import InputSource


class TestInputSource:
    @pytest.mark.unit
    def test_piped_input_skips_prompt(self, piped):
        source = piped("my_app\n")
        assert source.read_line("Project Name [.]: ") == "my_app"
        assert source.output.getvalue() == ""

    @pytest.mark.unit
    def test_terminal_input_writes_prompt_first(self, tty):
        source = tty("my_app\n")
        assert source.read_line("Project Name [.]: ") == "my_app"
        assert source.output.getvalue() == "Project Name [.]: "

    @pytest.mark.unit
    def test_end_of_input_yields_empty_string(self, piped):
        source = piped("")
        assert source.read_line("Project Name [.]: ") == ""

    @pytest.mark.unit
    def test_lines_consumed_in_order(self, piped):
        source = piped("first\r\nsecond\n")
        assert source.read_line() == "first"
        assert source.read_line() == "second"
        assert source.read_line() == ""

    @pytest.mark.unit
    def test_explicit_hint_overrides_detection(self, piped):
        source = piped("x\n")
        assert source.read_line("prompt> ", interactive=True) == "x"
        assert source.output.getvalue() == "prompt> "

    @pytest.mark.unit
    def test_closed_stream_yields_empty_string(self):
        stream = io.StringIO("data\n")
        stream.close()
        source = InputSource(stream=stream, output=io.StringIO())
        assert source.interactive is False
        assert source.read_line("x") == ""

    @pytest.mark.unit
    def test_detects_terminal(self, tty, piped):
        assert tty().interactive is True
        assert piped().interactive is False
