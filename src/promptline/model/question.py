"""Question model: configuration and answer resolution for a single prompt."""

from __future__ import annotations

import glob as globbing
import pathlib
import re
import sys
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from promptline.converter import FILE_KINDS, AnswerConverter, ConverterRegistry, describe_type, resolve_kind
from promptline.completion import complete
from promptline.errors import NotInRangeError

if TYPE_CHECKING:
    from promptline.prompter import Prompter
    from promptline.providers.base import InputProvider


CONFIRM_TEXT = "Are you sure?  "

RESPONSE_KEYS = (
    "ambiguous_completion",
    "ask_on_error",
    "invalid_type",
    "no_completion",
    "not_in_range",
    "mismatch",
    "not_valid",
)


class _RepeatQuestion:
    """Marker for ``responses["ask_on_error"]``: redisplay the question itself."""

    def __repr__(self) -> str:
        return "REPEAT_QUESTION"


REPEAT_QUESTION = _RepeatQuestion()


class WhitespaceMode(Enum):
    """How whitespace in a line answer is normalized."""

    NONE = "none"
    STRIP = "strip"
    CHOMP = "chomp"
    COLLAPSE = "collapse"
    STRIP_AND_COLLAPSE = "strip_and_collapse"
    CHOMP_AND_COLLAPSE = "chomp_and_collapse"
    REMOVE = "remove"

    @classmethod
    def _missing_(cls, value: object) -> WhitespaceMode:
        return cls.NONE


class CaseMode(Enum):
    """How character case in a line answer is normalized."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    CAPITALIZE = "capitalize"

    @classmethod
    def _missing_(cls, value: object) -> CaseMode:
        aliases = {"upcase": cls.UP, "downcase": cls.DOWN}
        return aliases.get(value, cls.NONE) if isinstance(value, str) else cls.NONE


class CharacterMode(Enum):
    """How raw input is read."""

    LINE = "line"
    FULL = "full"
    GETC = "getc"


class GatherMode(Enum):
    """How repeated answers are collected."""

    NONE = "none"
    COUNT = "count"
    TERMINATOR = "terminator"
    KEYED = "keyed"


def _chomp(text: str) -> str:
    for terminator in ("\r\n", "\n", "\r"):
        if text.endswith(terminator):
            return text[: -len(terminator)]
    return text


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text)


_WHITESPACE_TRANSFORMS: dict[WhitespaceMode, Callable[[str], str]] = {
    WhitespaceMode.NONE: lambda text: text,
    WhitespaceMode.STRIP: str.strip,
    WhitespaceMode.CHOMP: _chomp,
    WhitespaceMode.COLLAPSE: _collapse,
    WhitespaceMode.STRIP_AND_COLLAPSE: lambda text: _collapse(text.strip()),
    WhitespaceMode.CHOMP_AND_COLLAPSE: lambda text: _collapse(_chomp(text)),
    WhitespaceMode.REMOVE: lambda text: re.sub(r"\s+", "", text),
}


def _program_directory() -> pathlib.Path:
    """Directory of the invoking program, or the working directory when unknown."""
    if sys.argv and sys.argv[0]:
        return pathlib.Path(sys.argv[0]).resolve().parent
    return pathlib.Path.cwd()


def _describe_validator(validator: Any) -> str:
    if isinstance(validator, re.Pattern):
        return f"/{validator.pattern}/"
    if isinstance(validator, str):
        return f"/{validator}/"
    name = getattr(validator, "__name__", None)
    return name if name else repr(validator)


class Question:
    """All the details of one prompt and the steps that resolve its answer.

    Settings may be given as keyword arguments or applied by *configure*,
    which receives the question before its responses are derived. Unknown
    settings raise ``TypeError``.

    ``answer`` stays ``None`` until the ask loop resolves the question.
    """

    def __init__(
        self,
        template: str = "",
        answer_type: Any = None,
        configure: Callable[[Question], None] | None = None,
        **settings: Any,
    ) -> None:
        self.template = template
        self.answer_type = answer_type
        self.completion = answer_type
        self.answer: Any = None

        self.character: bool | str | None = None
        self.limit: int | None = None
        self.echo: bool | str = True
        self.use_line_editor = False
        self.whitespace_mode: WhitespaceMode | str | None = WhitespaceMode.STRIP
        self.case_mode: CaseMode | str | None = None
        self.overwrite_prompt = False

        self.default: Any = None
        self.validator: re.Pattern[str] | str | Callable[[Any], bool] | None = None
        self.above: Any = None
        self.below: Any = None
        self.member_of: Any = None

        self.confirm: bool | str | None = None
        self.gather: Any = None
        self.verify_match = False

        self.directory = _program_directory()
        self.glob = "*"
        self.responses: dict[str, Any] = {}

        self._first_answer: Any = None
        self._default_appended = False

        for name, value in settings.items():
            if name.startswith("_") or not (name in vars(self) or name == "first_answer"):
                raise TypeError(f"Unknown question setting: {name!r}")
            setattr(self, name, value)

        if configure is not None:
            configure(self)

        self.build_responses()

    def __str__(self) -> str:
        return self.template

    def __repr__(self) -> str:
        return f"Question({self.template!r}, {self.answer_type!r})"

    # --- responses ----------------------------------------------------------

    def build_responses(self, message_source: Any = None, new_hash_wins: bool = False) -> dict[str, Any]:
        """Derive the standard response messages from the current settings.

        With *new_hash_wins* false, responses already set on the question
        override the derived text; with it true the derived text replaces
        them (used after settings change on a live question).
        """
        if self._default_is_plain():
            self._append_default()

        source = self.answer_type if message_source is None else message_source
        old = self.responses
        new = self._derived_responses(source)
        self.responses = {**old, **new} if new_hash_wins else {**new, **old}
        return self.responses

    def derive_responses(self, message_source: Any = None) -> dict[str, Any]:
        """Derive responses, keeping any set explicitly."""
        return self.build_responses(message_source, new_hash_wins=False)

    def refresh_responses(self, message_source: Any = None) -> dict[str, Any]:
        """Derive responses, replacing any set explicitly."""
        return self.build_responses(message_source, new_hash_wins=True)

    def _derived_responses(self, message_source: Any) -> dict[str, Any]:
        choices = describe_type(message_source)
        return {
            "ambiguous_completion": f"Ambiguous choice.  Please choose one of {choices}.",
            "ask_on_error": "?  ",
            "invalid_type": f"You must enter a valid {choices}.",
            "no_completion": f"You must choose one of {choices}.",
            "not_in_range": f"Your answer isn't within the expected range ({self.expected_range()}).",
            "mismatch": "Your entries didn't match.",
            "not_valid": f"Your answer isn't valid (must match {_describe_validator(self.validator)}).",
        }

    def _default_is_plain(self) -> bool:
        return isinstance(self.default, (str, int, float)) and not isinstance(self.default, bool)

    def _append_default(self) -> None:
        """Show the default between ``|...|`` while keeping trailing whitespace."""
        if self._default_appended:
            return
        self._default_appended = True

        marker = f"|{self.default}|"
        trailing = re.search(r"[\t ]+\Z", self.template)
        if trailing:
            self.template += marker + trailing.group(0)
        elif self.template == "":
            self.template = marker + "  "
        elif self.template.endswith("\n"):
            self.template = self.template[:-1] + "  " + marker + "\n"
        else:
            self.template += "  " + marker

    # --- normalization ------------------------------------------------------

    def remove_whitespace(self, answer_string: str) -> str:
        mode = WhitespaceMode(self.whitespace_mode)
        return _WHITESPACE_TRANSFORMS[mode](answer_string)

    def change_case(self, answer_string: str) -> str:
        mode = CaseMode(self.case_mode)
        if mode is CaseMode.UP:
            return answer_string.upper()
        if mode is CaseMode.DOWN:
            return answer_string.lower()
        if mode is CaseMode.CAPITALIZE:
            return answer_string.capitalize()
        return answer_string

    def format_answer(self, answer_string: Any) -> str:
        """Apply whitespace then case rules to a line answer."""
        return self.change_case(self.remove_whitespace(str(answer_string)))

    def answer_or_default(self, answer_string: str) -> Any:
        if answer_string == "" and self.default is not None:
            return self.default
        return answer_string

    # --- checks -------------------------------------------------------------

    def valid_answer(self) -> bool:
        """Validation runs on the normalized answer, before conversion."""
        validator = self.validator
        if validator is None:
            return True
        if isinstance(validator, (re.Pattern, str)):
            return re.search(validator, str(self.answer)) is not None
        return bool(validator(self.answer))

    def in_range(self) -> bool:
        answer = self.answer
        return (
            (self.above is None or answer > self.above)
            and (self.below is None or answer < self.below)
            and (self.member_of is None or answer in self.member_of)
        )

    def check_range(self) -> None:
        if not self.in_range():
            raise NotInRangeError(self.responses.get("not_in_range", ""))

    def expected_range(self) -> str:
        """English description of the range settings."""
        expected = []
        if self.above is not None:
            expected.append(f"above {self.above}")
        if self.below is not None:
            expected.append(f"below {self.below}")
        if self.member_of is not None:
            expected.append(f"included in {self.member_of!r}")

        if not expected:
            return ""
        if len(expected) == 1:
            return expected[0]
        if len(expected) == 2:
            return " and ".join(expected)
        return ", ".join(expected[:-1]) + f", and {expected[-1]}"

    # --- completion & conversion --------------------------------------------

    def selection(self) -> list[Any]:
        """Valid answers, known only for a choice list or a file-like completion."""
        if isinstance(self.completion, (list, tuple)):
            return list(self.completion)
        if resolve_kind(self.completion) in FILE_KINDS:
            pattern = str(pathlib.Path(self.directory) / self.glob)
            return sorted(pathlib.Path(path).name for path in globbing.glob(pattern))
        return []

    def choices_complete(self, answer_string: str) -> Any:
        return complete(self.selection(), answer_string)

    def convert(self, registry: ConverterRegistry | None = None) -> Any:
        """Convert ``answer`` to ``answer_type`` in place and return it."""
        self.answer = AnswerConverter(self, registry).convert()
        return self.answer

    # --- first answer -------------------------------------------------------

    def take_first_answer(self) -> Any:
        """Return the pre-supplied answer; it is cleared by this call."""
        try:
            return self._first_answer
        finally:
            self._first_answer = None

    def has_first_answer(self) -> bool:
        return self._first_answer is not None

    @property
    def first_answer(self) -> Any:
        return self.take_first_answer()

    @first_answer.setter
    def first_answer(self, value: Any) -> None:
        self._first_answer = value

    # --- modes --------------------------------------------------------------

    @property
    def read_mode(self) -> CharacterMode:
        if self.character == "getc" or self.character is CharacterMode.GETC:
            return CharacterMode.GETC
        if self.character is True or self.character in ("full", CharacterMode.FULL):
            return CharacterMode.FULL
        return CharacterMode.LINE

    @property
    def gather_mode(self) -> GatherMode:
        gather = self.gather
        if gather is None or isinstance(gather, bool):
            return GatherMode.NONE
        if isinstance(gather, int):
            return GatherMode.COUNT
        if isinstance(gather, (str, re.Pattern)):
            return GatherMode.TERMINATOR
        if isinstance(gather, Mapping):
            return GatherMode.KEYED
        raise TypeError(f"Unsupported gather setting: {gather!r}")

    # --- resolution ---------------------------------------------------------

    def get_response(self, provider: InputProvider) -> str:
        """Return a line or character of input for this question.

        An armed first answer is used instead of reading. Character reads
        are returned as read; line answers are normalized. End of input
        raises ``EOFError``.
        """
        if self.has_first_answer():
            return self.format_answer(self.take_first_answer())

        mode = self.read_mode
        if mode is CharacterMode.GETC:
            return provider.getc(self)
        if mode is CharacterMode.FULL:
            return provider.read_char(self)
        return self.format_answer(provider.read_line(self))

    def get_response_or_default(self, provider: InputProvider) -> Any:
        self.answer = self.answer_or_default(self.get_response(provider))
        return self.answer

    def ask_at(self, prompter: Prompter) -> Any:
        if self.gather_mode is not GatherMode.NONE:
            return prompter.gather(self)
        return prompter.ask_once(self)

    def confirm_template(self) -> str:
        """Template source of the confirmation question, not yet rendered."""
        if self.confirm is True:
            return CONFIRM_TEXT
        return str(self.confirm)

    def confirm_question(self, prompter: Prompter) -> str:
        return prompter.render(self.confirm_template(), self)

    def ask_on_error_msg(self) -> Any:
        """The question itself, the ``ask_on_error`` text, or ``None``."""
        message = self.responses.get("ask_on_error")
        if message is REPEAT_QUESTION:
            return self
        return message or None
