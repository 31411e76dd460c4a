"""CallbackInput: delegates reads to a user-supplied callback function."""

from __future__ import annotations

from typing import Callable

import click

from promptline.model.question import Question


class CallbackInput:
    """Input provider that delegates answering to a callback.

    The callback receives the Question and returns the raw answer text.
    Character reads use the first character of the callback's answer; an
    empty answer there means the input is exhausted. Output goes to
    *writer*, or to stdout when none is given.
    """

    def __init__(
        self,
        callback: Callable[[Question], str],
        writer: Callable[[str], None] | None = None,
    ) -> None:
        self._callback = callback
        self._writer = writer

    def read_line(self, question: Question) -> str:
        return self._callback(question)

    def read_char(self, question: Question) -> str:
        response = self._callback(question)
        if not response:
            raise EOFError("The callback returned no character.")
        return response[0]

    def getc(self, question: Question) -> str:
        return self.read_char(question)

    def write(self, text: str) -> None:
        if self._writer is None:
            click.echo(text, nl=False)
        else:
            self._writer(text)
