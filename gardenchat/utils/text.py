"""
Text helpers used by the tip matcher and the response composer.

All functions are pure (no I/O, no DB, no LLM).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def truncate(value: str, limit: int, marker: str = "...") -> str:
    """Cut ``value`` at ``limit`` characters and append ``marker`` when cut."""
    if len(value) > limit:
        return value[:limit] + marker
    return value


def camelize(key: str) -> str:
    """``first_image_alt_text`` -> ``firstImageAltText``."""
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def string_values(mapping: Mapping[str, Any] | None) -> list[str]:
    """Return the string values of ``mapping`` in insertion order."""
    if not mapping:
        return []
    return [v for v in mapping.values() if isinstance(v, str)]


def question_keywords(question: str, stop_words: Iterable[str], min_length: int = 4) -> list[str]:
    """
    Lower-case, whitespace-split words of ``question`` that are at least
    ``min_length`` characters long and not stop words.
    """
    stop = frozenset(stop_words)
    return [
        word
        for word in question.lower().split()
        if len(word) >= min_length and word not in stop
    ]


def unique(items: Iterable[str]) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
