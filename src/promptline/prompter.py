"""Prompter: drives questions through the ask loop."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from promptline.config import PromptConfig
from promptline.converter import ConverterRegistry
from promptline.errors import (
    MismatchError,
    NotValidError,
    NoConfirmationError,
    QuestionError,
)
from promptline.model.question import GatherMode, Question
from promptline.providers.base import InputProvider
from promptline.providers.console import ConsoleInput
from promptline.templates import TemplateRenderer

logger = logging.getLogger(__name__)

YES_OR_NO = re.compile(r"\A(?:y(?:es)?|no?)\Z", re.IGNORECASE)


class Prompter:
    """Asks questions through an input provider and retries rejected answers.

    Every rejected answer (invalid, out of range, unconvertible, ambiguous,
    unconfirmed) is explained with the question's response message and the
    question is asked again. ``PromptConfig.max_attempts`` bounds the
    retries; without it the prompter asks until an answer is accepted.
    End of input (``EOFError``) always propagates.
    """

    def __init__(
        self,
        provider: InputProvider | None = None,
        *,
        config: PromptConfig | None = None,
        renderer: TemplateRenderer | None = None,
        registry: ConverterRegistry | None = None,
    ) -> None:
        self.provider: InputProvider = provider or ConsoleInput()
        self.config = config or PromptConfig()
        self._renderer = renderer or TemplateRenderer()
        self._registry = registry
        self.key: Any = None

    # --- public API ---------------------------------------------------------

    def ask(
        self,
        template: str | Question,
        answer_type: Any = None,
        configure: Callable[[Question], None] | None = None,
        **settings: Any,
    ) -> Any:
        """Ask a question and return its converted answer.

        *template* may be a ready-made :class:`Question`, in which case the
        other arguments are ignored.
        """
        if isinstance(template, Question):
            question = template
        else:
            settings.setdefault("whitespace_mode", self.config.whitespace_mode)
            settings.setdefault("use_line_editor", self.config.use_line_editor)
            question = Question(template, answer_type, configure, **settings)
        return question.ask_at(self)

    def agree(self, template: str, character: bool = False, context: Question | None = None) -> bool:
        """Ask a yes/no question and return ``True`` for yes.

        *template* is rendered with *context* in scope when given, so a
        confirmation can refer to the question being confirmed.
        """

        def configure(question: Question) -> None:
            question.validator = YES_OR_NO
            question.responses["not_valid"] = 'Please enter "yes" or "no".'
            if character:
                question.character = True

        question = Question(
            template,
            lambda answer: answer.lower().startswith("y"),
            configure,
            whitespace_mode=self.config.whitespace_mode,
        )
        return bool(self.ask_once(question, context=context))

    def say(self, statement: Any, question: Question | None = None) -> None:
        """Render *statement* as a template and write it."""
        self._emit(self.render(str(statement), question))

    def _emit(self, text: str) -> None:
        """Write already-rendered text.

        Text ending in a space or tab stays on the current line; anything
        else is terminated with a newline.
        """
        if not text:
            return
        if text.endswith((" ", "\t")):
            self.provider.write(text)
        else:
            self.provider.write(text if text.endswith("\n") else text + "\n")

    def render(self, template: str, question: Question | None = None) -> str:
        return self._renderer.render(template, question, key=self.key, prompter=self)

    # --- ask loop -----------------------------------------------------------

    def ask_once(self, question: Question, context: Question | None = None) -> Any:
        """Resolve a single answer for *question*, retrying on rejection.

        The question template is rendered with *context* in scope instead
        of *question* when given.
        """
        self.say(question.template, context or question)
        attempts = 0
        while True:
            try:
                return self._resolve(question)
            except QuestionError as exc:
                attempts += 1
                logger.debug(
                    "Answer %r rejected (%s), attempt %d",
                    question.answer,
                    type(exc).__name__,
                    attempts,
                )
                if self.config.max_attempts is not None and attempts >= self.config.max_attempts:
                    raise
                self.explain_error(exc.response_key, question, context)

    def _resolve(self, question: Question) -> Any:
        question.get_response_or_default(self.provider)
        if not question.valid_answer():
            raise NotValidError(question.responses.get("not_valid", ""))
        question.convert(self._registry)
        question.check_range()
        if question.confirm and not self.agree(question.confirm_template(), context=question):
            raise NoConfirmationError("Answer not confirmed.")
        return question.answer

    def explain_error(
        self,
        response_key: str | None,
        question: Question,
        context: Question | None = None,
    ) -> None:
        """Write the response for *response_key*, then the ask-on-error prompt.

        Responses embed validators, choices and ranges, so they are written
        as-is; only the question and ``ask_on_error`` templates are rendered.
        """
        if response_key:
            self._emit(str(question.responses[response_key]))
        message = question.ask_on_error_msg()
        if message is question:
            self.say(question.template, context or question)
        elif message:
            self.say(message, context or question)

    # --- gathering ----------------------------------------------------------

    def gather(self, question: Question) -> Any:
        """Collect several answers according to ``question.gather``.

        With ``verify_match`` set, the whole gather restarts until every
        answer is identical and that single answer is returned.
        """
        original_template = question.template
        try:
            while True:
                question.template = original_template
                answers = self._gather_by_mode(question)
                values = list(answers.values()) if isinstance(answers, dict) else answers
                if question.verify_match and len(_unique(values)) > 1:
                    logger.info("Gathered answers differ, restarting: %r", values)
                    self.explain_error(MismatchError.response_key, question)
                    continue
                break
        finally:
            question.template = original_template
            self.key = None

        if question.verify_match:
            return values[-1] if values else None
        return answers

    def _gather_by_mode(self, question: Question) -> list[Any] | dict[Any, Any]:
        mode = question.gather_mode
        if mode is GatherMode.COUNT:
            answers = [self.ask_once(question)]
            question.template = ""
            for _ in range(question.gather - 1):
                answers.append(self.ask_once(question))
            return answers
        if mode is GatherMode.TERMINATOR:
            answers = [self.ask_once(question)]
            question.template = ""
            while not _is_terminator(question.gather, answers[-1]):
                answers.append(self.ask_once(question))
            answers.pop()
            return answers
        if mode is GatherMode.KEYED:
            keyed: dict[Any, Any] = {}
            for key in sorted(question.gather, key=str):
                self.key = key
                keyed[key] = self.ask_once(question)
            return keyed
        raise ValueError(f"Question {question.template!r} is not gathering answers")


def _is_terminator(terminator: str | re.Pattern[str], answer: Any) -> bool:
    if isinstance(terminator, re.Pattern):
        return terminator.search(str(answer)) is not None
    return str(answer) == terminator


def _unique(values: list[Any]) -> list[Any]:
    unique: list[Any] = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique
