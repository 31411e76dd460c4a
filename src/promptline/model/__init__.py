"""Data model for questions."""

from promptline.model.question import (
    CONFIRM_TEXT,
    REPEAT_QUESTION,
    RESPONSE_KEYS,
    CaseMode,
    CharacterMode,
    GatherMode,
    Question,
    WhitespaceMode,
)

__all__ = [
    "Question",
    "WhitespaceMode",
    "CaseMode",
    "CharacterMode",
    "GatherMode",
    "CONFIRM_TEXT",
    "REPEAT_QUESTION",
    "RESPONSE_KEYS",
]
