"""ScriptedInput: answers questions from an in-memory transcript."""

from __future__ import annotations

import io
from typing import Iterable

from promptline.providers.console import ConsoleInput


class ScriptedInput(ConsoleInput):
    """Console input over a prepared transcript.

    *answers* is either raw input text or an iterable of lines, each of
    which is terminated with a newline. Everything written is captured and
    available from :meth:`output`.
    """

    def __init__(self, answers: str | Iterable[str] = "") -> None:
        text = answers if isinstance(answers, str) else "".join(f"{answer}\n" for answer in answers)
        self._buffer = io.StringIO()
        super().__init__(io.StringIO(text), self._buffer)

    def output(self) -> str:
        """Return everything written so far."""
        return self._buffer.getvalue()
