"""Line input from a live terminal or a piped stream."""

import sys
from typing import Optional, TextIO


class InputSource:
    """Reads one line of free-text input at a time.

    On a terminal the prompt is written before reading. When input is piped
    the prompt is skipped so scripted answers can be fed one per line. End of
    input yields an empty string, which callers treat as "keep the default".
    """

    def __init__(self, stream: Optional[TextIO] = None, output: Optional[TextIO] = None):
        self._stream = stream
        self._output = output

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    @property
    def interactive(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def read_line(self, prompt_text: str = "", interactive: Optional[bool] = None) -> str:
        if interactive is None:
            interactive = self.interactive
        if interactive and prompt_text:
            self.output.write(prompt_text)
            self.output.flush()
        try:
            line = self.stream.readline()
        except (EOFError, OSError, ValueError):
            return ""
        return line.rstrip("\r\n")
