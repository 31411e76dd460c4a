"""Answer conversion: kinds, the parser registry, and the converter."""

from __future__ import annotations

import datetime
import io
import logging
import pathlib
import re
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from promptline.errors import InvalidTypeError

if TYPE_CHECKING:
    from promptline.model.question import Question

logger = logging.getLogger(__name__)


class AnswerKind(Enum):
    """Conversion target for an answer."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    SYMBOL = "symbol"
    REGEX = "regex"
    DATE = "date"
    DATETIME = "datetime"
    FILE = "file"
    PATH = "path"
    CHOICES = "choices"
    CUSTOM = "custom"


_TYPE_KINDS: dict[Any, AnswerKind] = {
    str: AnswerKind.STRING,
    int: AnswerKind.INTEGER,
    float: AnswerKind.FLOAT,
    re.Pattern: AnswerKind.REGEX,
    datetime.date: AnswerKind.DATE,
    datetime.datetime: AnswerKind.DATETIME,
    pathlib.Path: AnswerKind.PATH,
    io.IOBase: AnswerKind.FILE,
    io.TextIOBase: AnswerKind.FILE,
}

FILE_KINDS = frozenset({AnswerKind.FILE, AnswerKind.PATH})


def resolve_kind(answer_type: Any) -> AnswerKind:
    """Map an ``answer_type`` setting onto an :class:`AnswerKind`."""
    if answer_type is None:
        return AnswerKind.STRING
    if isinstance(answer_type, AnswerKind):
        return answer_type
    if isinstance(answer_type, (list, tuple)):
        return AnswerKind.CHOICES
    if isinstance(answer_type, type) and answer_type in _TYPE_KINDS:
        return _TYPE_KINDS[answer_type]
    return AnswerKind.CUSTOM


def describe_type(answer_type: Any) -> str:
    """Human-readable name of an answer type, used in response messages."""
    if isinstance(answer_type, (list, tuple)):
        return "[" + ", ".join(str(choice) for choice in answer_type) + "]"
    kind = resolve_kind(answer_type)
    if kind is not AnswerKind.CUSTOM:
        return kind.value
    return getattr(answer_type, "__name__", repr(answer_type))


# ---------------------------------------------------------------------------
# Built-in parsers
# ---------------------------------------------------------------------------

Parser = Callable[[str, "Question"], Any]


def _to_string(answer: str, question: Question) -> str:
    return str(answer)


def _to_symbol(answer: str, question: Question) -> str:
    return sys.intern(str(answer))


def _to_integer(answer: str, question: Question) -> int:
    try:
        return int(answer, 0)
    except ValueError:
        # int(..., 0) rejects leading zeros such as "007"
        return int(answer, 10)


def _to_float(answer: str, question: Question) -> float:
    return float(answer)


def _to_regex(answer: str, question: Question) -> re.Pattern[str]:
    return re.compile(answer)


def _to_date(answer: str, question: Question) -> datetime.date:
    return datetime.date.fromisoformat(answer)


def _to_datetime(answer: str, question: Question) -> datetime.datetime:
    return datetime.datetime.fromisoformat(answer)


def _to_choice(answer: str, question: Question) -> Any:
    return question.choices_complete(answer)


def _to_path(answer: str, question: Question) -> pathlib.Path:
    return pathlib.Path(question.directory) / question.choices_complete(answer)


def _to_file(answer: str, question: Question) -> io.IOBase:
    return open(_to_path(answer, question), encoding="utf-8")


def _to_custom(answer: str, question: Question) -> Any:
    answer_type = question.answer_type
    parse = getattr(answer_type, "parse", None)
    if callable(parse):
        return parse(answer)
    return answer_type(answer)


class ConverterRegistry:
    """Parsers keyed by :class:`AnswerKind`.

    Latest registration wins, so callers may replace a built-in parser.
    """

    def __init__(self) -> None:
        self._parsers: dict[AnswerKind, Parser] = {}

    def register(self, kind: AnswerKind, parser: Parser) -> None:
        self._parsers[kind] = parser

    def get(self, kind: AnswerKind) -> Parser:
        try:
            return self._parsers[kind]
        except KeyError:
            raise LookupError(f"No parser registered for {kind.value!r}") from None

    def kinds(self) -> list[AnswerKind]:
        return list(self._parsers)


def default_registry() -> ConverterRegistry:
    """Return a registry populated with the built-in parsers."""
    registry = ConverterRegistry()
    registry.register(AnswerKind.STRING, _to_string)
    registry.register(AnswerKind.SYMBOL, _to_symbol)
    registry.register(AnswerKind.INTEGER, _to_integer)
    registry.register(AnswerKind.FLOAT, _to_float)
    registry.register(AnswerKind.REGEX, _to_regex)
    registry.register(AnswerKind.DATE, _to_date)
    registry.register(AnswerKind.DATETIME, _to_datetime)
    registry.register(AnswerKind.CHOICES, _to_choice)
    registry.register(AnswerKind.PATH, _to_path)
    registry.register(AnswerKind.FILE, _to_file)
    registry.register(AnswerKind.CUSTOM, _to_custom)
    return registry


DEFAULT_REGISTRY = default_registry()


class AnswerConverter:
    """Converts a question's current answer to its ``answer_type``.

    Conversion failures (``ValueError``, ``TypeError``, bad regex syntax)
    surface as :class:`InvalidTypeError` carrying the ``invalid_type``
    response. Auto-completion failures propagate unchanged so the caller
    can tell an ambiguous choice from a missing one.
    """

    def __init__(self, question: Question, registry: ConverterRegistry | None = None) -> None:
        self._question = question
        self._registry = registry or DEFAULT_REGISTRY

    def convert(self) -> Any:
        question = self._question
        answer = question.answer
        # A non-string default was supplied already converted.
        if not isinstance(answer, str):
            return answer

        kind = resolve_kind(question.answer_type)
        parser = self._registry.get(kind)
        try:
            return parser(answer, question)
        except (ValueError, TypeError, re.error) as exc:
            logger.debug("Conversion of %r to %s failed: %s", answer, kind.value, exc)
            raise InvalidTypeError(
                question.responses.get("invalid_type", ""),
                answer_type=question.answer_type,
            ) from exc
