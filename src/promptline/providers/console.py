"""ConsoleInput: reads answers from a terminal or from text streams."""

from __future__ import annotations

import sys
from typing import TextIO

import click

from promptline.model.question import Question

_BACKSPACES = ("\b", "\x7f")
_KILL_LINE = "\x15"  # Ctrl-U
_ESCAPE = "\x1b"
_ERASE = "\b \b"


class ConsoleInput:
    """Input provider over stdin/stdout, or over explicit streams.

    Line answers keep their line terminator so ``chomp`` whitespace handling
    stays meaningful. A ``limit`` or a non-``True`` echo switches to a
    character-by-character read with backspace and Ctrl-U editing. The line
    editor (readline with tab completion over the question's selection) is
    only used when reading the real stdin.

    When reading a stream rather than a terminal, a ``"\\r\\n"`` ending a
    character-by-character line counts as one terminator, and the line
    ending typed after a single-character answer is discarded, so the next
    read starts on the following line.
    """

    def __init__(self, input_stream: TextIO | None = None, output_stream: TextIO | None = None) -> None:
        self._input = input_stream
        self._output = output_stream
        # Line ending still to discard: None, "lf" (a "\n") or "eol" (any of "\n", "\r\n", "\r").
        self._skip: str | None = None

    @property
    def input_stream(self) -> TextIO:
        return self._input if self._input is not None else sys.stdin

    # --- output -------------------------------------------------------------

    def write(self, text: str) -> None:
        if self._output is None:
            click.echo(text, nl=False)
            return
        self._output.write(text)
        self._output.flush()

    # --- input --------------------------------------------------------------

    def read_line(self, question: Question) -> str:
        if question.use_line_editor and self._input is None:
            return self._read_with_line_editor(question)
        if question.echo is True and not question.limit:
            return self._read_stream_line()
        return self._read_raw_line(question)

    def read_char(self, question: Question) -> str:
        char = self._next_char()
        if not self._is_terminal():
            if char == "\r":
                self._skip = "lf"
            elif char != "\n":
                self._skip = "eol"
        if not question.overwrite_prompt:
            self.write(_echo_for(question.echo, char) + "\n")
        return char

    def getc(self, question: Question) -> str:
        return self._read_stream_char()

    def _is_terminal(self) -> bool:
        return self._input is None and sys.stdin.isatty()

    def _next_char(self) -> str:
        if self._is_terminal():
            return click.getchar(echo=False)
        return self._read_stream_char()

    def _read_stream_char(self) -> str:
        while True:
            char = self.input_stream.read(1)
            skip, self._skip = self._skip, None
            if not char:
                raise EOFError("The input stream is exhausted.")
            if skip == "eol" and char == "\r":
                self._skip = "lf"
                continue
            if skip and char == "\n":
                continue
            return char

    def _read_stream_line(self) -> str:
        skip, self._skip = self._skip, None
        line = self.input_stream.readline()
        if (skip and line == "\n") or (skip == "eol" and line in ("\r\n", "\r")):
            line = self.input_stream.readline()
        if not line:
            raise EOFError("The input stream is exhausted.")
        return line

    def _read_raw_line(self, question: Question) -> str:
        line = ""
        while True:
            try:
                char = self._next_char()
            except EOFError:
                if not line:
                    raise
                break
            if char in ("\n", "\r"):
                if char == "\r" and not self._is_terminal():
                    self._skip = "lf"
                break
            if char in _BACKSPACES:
                if line:
                    line = line[:-1]
                    if question.echo:
                        self.write(_ERASE)
            elif char == _KILL_LINE:
                if question.echo:
                    self.write(_ERASE * len(line))
                line = ""
            elif char == _ESCAPE:
                continue
            else:
                line += char
                self.write(_echo_for(question.echo, char))
            if question.limit and len(line) >= question.limit:
                break
        if not question.overwrite_prompt:
            self.write("\n")
        return line

    def _read_with_line_editor(self, question: Question) -> str:
        import readline

        choices = [str(choice) for choice in question.selection()]

        def completer(text: str, state: int) -> str | None:
            matches = [choice for choice in choices if choice.startswith(text)]
            return matches[state] if state < len(matches) else None

        previous = readline.get_completer()
        readline.set_completer(completer)
        readline.parse_and_bind("tab: complete")
        try:
            return input() + "\n"
        finally:
            readline.set_completer(previous)


def _echo_for(echo: bool | str, char: str) -> str:
    if echo is True:
        return char
    if echo:
        return str(echo)
    return ""
