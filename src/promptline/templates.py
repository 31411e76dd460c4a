"""Jinja2 rendering of question and confirmation templates."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment


def default_environment() -> Environment:
    # Prompts are plain text; trailing whitespace and newlines are significant.
    return Environment(autoescape=False, keep_trailing_newline=True)


class TemplateRenderer:
    """Renders template source with a question-aware context.

    Templates see ``question``, ``answer`` and any extra names passed to
    :meth:`render` (the ask loop adds ``key`` and ``prompter``).
    """

    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment or default_environment()

    def render(self, source: str, question: Any = None, **context: Any) -> str:
        if not source:
            return ""
        context.setdefault("question", question)
        context.setdefault("answer", getattr(question, "answer", None))
        return self._env.from_string(source).render(**context)
