"""promptline: questions, answers and the rules that connect them."""
from __future__ import annotations

__version__ = "0.1.0"

from promptline.config import PromptConfig
from promptline.converter import AnswerConverter, AnswerKind, ConverterRegistry
from promptline.errors import (
    InvalidTypeError,
    MismatchError,
    NoAutoCompleteMatch,
    NoConfirmationError,
    NotInRangeError,
    NotValidError,
    QuestionError,
)
from promptline.model.question import REPEAT_QUESTION, CaseMode, GatherMode, Question, WhitespaceMode
from promptline.prompter import Prompter

__all__ = [
    "__version__",
    "PromptConfig",
    "Prompter",
    "Question",
    "REPEAT_QUESTION",
    "WhitespaceMode",
    "CaseMode",
    "GatherMode",
    "AnswerKind",
    "AnswerConverter",
    "ConverterRegistry",
    "QuestionError",
    "NotValidError",
    "NotInRangeError",
    "InvalidTypeError",
    "MismatchError",
    "NoConfirmationError",
    "NoAutoCompleteMatch",
]
