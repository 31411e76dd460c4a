"""Prefix completion of a partial answer against a fixed list of choices."""

from __future__ import annotations

import re
from typing import Any, Iterable

from promptline.errors import NoAutoCompleteMatch


def _abbreviation_pattern(partial: str) -> re.Pattern[str]:
    """Build a pattern where every word of *partial* may abbreviate a longer word.

    "f b" matches "foo bar"; matching is anchored at the start and case-sensitive.
    """
    escaped = re.escape(partial)
    return re.compile(re.sub(r"\w+\b", lambda m: m.group(0) + r"\w*", escaped))


def complete(candidates: Iterable[Any], partial: str) -> Any:
    """Return the one candidate that *partial* unambiguously abbreviates.

    An exact match always wins. Otherwise candidates are ordered by length
    and the shortest match wins when every other match extends it
    ("go" beats "gold"). Raises :class:`NoAutoCompleteMatch` when nothing
    matches or the matches diverge.
    """
    choices = list(candidates)
    for choice in choices:
        if str(choice) == partial:
            return choice

    pattern = _abbreviation_pattern(partial)
    matches = sorted(
        (choice for choice in choices if pattern.match(str(choice))),
        key=lambda choice: len(str(choice)),
    )
    if not matches:
        raise NoAutoCompleteMatch(partial)

    best = matches[0]
    for other in matches[1:]:
        if not str(other).startswith(str(best)):
            raise NoAutoCompleteMatch(partial, ambiguous=True, candidates=matches)
    return best
