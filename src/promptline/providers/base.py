"""Input provider protocol definition."""

from __future__ import annotations

from typing import Protocol

from promptline.model.question import Question


class InputProvider(Protocol):
    """Protocol for objects that read answers and write prompt text.

    Reads raise ``EOFError`` once input is exhausted.
    """

    def read_line(self, question: Question) -> str: ...

    def read_char(self, question: Question) -> str: ...

    def getc(self, question: Question) -> str: ...

    def write(self, text: str) -> None: ...
