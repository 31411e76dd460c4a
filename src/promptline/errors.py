"""Error hierarchy for question resolution.

Every error here is recoverable: the ask loop explains it to the user with
the question's ``responses[response_key]`` message and asks again.
End of input is signalled with the builtin :class:`EOFError` and is never
retried.
"""
from __future__ import annotations

from typing import Any


class QuestionError(Exception):
    """Base error for answers rejected during resolution."""

    response_key: str | None = None

    def __init__(self, message: str = "", *, response_key: str | None = None) -> None:
        super().__init__(message)
        if response_key is not None:
            self.response_key = response_key


class NotValidError(QuestionError):
    """The normalized answer failed the question's validator."""

    response_key = "not_valid"


class NotInRangeError(QuestionError):
    """The converted answer failed the above/below/member_of checks."""

    response_key = "not_in_range"


class InvalidTypeError(QuestionError):
    """The answer could not be converted to the question's answer type."""

    response_key = "invalid_type"

    def __init__(self, message: str = "", *, answer_type: Any = None) -> None:
        super().__init__(message)
        self.answer_type = answer_type


class MismatchError(QuestionError):
    """Gathered answers disagreed while ``verify_match`` was set."""

    response_key = "mismatch"


class NoConfirmationError(QuestionError):
    """The user declined the confirmation question."""

    response_key = None


class NoAutoCompleteMatch(QuestionError):
    """A partial answer matched no choice, or more than one.

    Internal to the ask loop; the user sees ``ambiguous_completion`` or
    ``no_completion`` instead of this error's text.
    """

    def __init__(
        self,
        partial: str,
        *,
        ambiguous: bool = False,
        candidates: list[Any] | None = None,
    ) -> None:
        key = "ambiguous_completion" if ambiguous else "no_completion"
        super().__init__(f"no unique completion for {partial!r}", response_key=key)
        self.partial = partial
        self.ambiguous = ambiguous
        self.candidates = candidates or []
