from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PromptConfig:
    max_attempts: int | None = None  # None = keep asking until an answer is accepted
    whitespace_mode: str = "strip"
    use_line_editor: bool = False
