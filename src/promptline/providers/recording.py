"""RecordingInput: wraps another provider and records every response."""

from __future__ import annotations

from dataclasses import dataclass

from promptline.model.question import Question
from promptline.providers.base import InputProvider


@dataclass(frozen=True)
class Exchange:
    """A recorded read: the question template and the raw response."""

    template: str
    response: str


class RecordingInput:
    """Input provider decorator that records all reads.

    Every read is forwarded to the inner provider and the raw response is
    recorded alongside the question's template at the time of the read.
    Writes pass straight through.
    """

    def __init__(self, inner: InputProvider) -> None:
        self._inner = inner
        self._records: list[Exchange] = []

    def read_line(self, question: Question) -> str:
        return self._record(question, self._inner.read_line(question))

    def read_char(self, question: Question) -> str:
        return self._record(question, self._inner.read_char(question))

    def getc(self, question: Question) -> str:
        return self._record(question, self._inner.getc(question))

    def write(self, text: str) -> None:
        self._inner.write(text)

    def _record(self, question: Question, response: str) -> str:
        self._records.append(Exchange(template=question.template, response=response))
        return response

    def transcript(self) -> list[Exchange]:
        """Return the list of all recorded exchanges."""
        return list(self._records)

    def clear(self) -> None:
        """Clear the recording history."""
        self._records.clear()
