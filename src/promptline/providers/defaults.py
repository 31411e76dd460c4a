"""DefaultsInput: accepts every question's default without user interaction."""

from __future__ import annotations

from promptline.model.question import Question


class DefaultsInput:
    """Input provider for non-interactive runs.

    - Questions with a default: answers ``""`` so the default is used
    - Questions without one: raises ``EOFError``

    Written text is kept and available from :meth:`output`.
    """

    def __init__(self) -> None:
        self._written: list[str] = []

    def read_line(self, question: Question) -> str:
        if question.default is None:
            raise EOFError(f"No default available for {question.template!r}.")
        return ""

    def read_char(self, question: Question) -> str:
        return self.read_line(question)

    def getc(self, question: Question) -> str:
        return self.read_line(question)

    def write(self, text: str) -> None:
        self._written.append(text)

    def output(self) -> str:
        return "".join(self._written)
