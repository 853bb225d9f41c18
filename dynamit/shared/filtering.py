"""Fuzzy filtering of collection names and JSON records.

A filter text is split on whitespace into keywords. An item is kept when
every keyword fuzzy-matches somewhere in it; order of the input is preserved.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any


def fuzzy_match(pattern: str, text: str) -> tuple[bool, list[int]]:
    """Case-insensitive subsequence match.

    Returns whether every character of ``pattern`` occurs in ``text`` in order,
    plus the matched character indices for highlighting.
    """
    if not pattern:
        return True, []
    indices: list[int] = []
    needle = pattern.lower()
    position = 0
    for index, char in enumerate(text.lower()):
        if char == needle[position]:
            indices.append(index)
            position += 1
            if position == len(needle):
                return True, indices
    return False, []


def keywords_of(filter_text: str) -> list[str]:
    return filter_text.split()


def _scalar_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return json.dumps(value)
    if isinstance(value, str):
        return value
    return None


def value_matches(keyword: str, value: Any) -> bool:
    """Check a keyword against every object key and scalar value, recursively."""
    if isinstance(value, dict):
        for key, child in value.items():
            if fuzzy_match(keyword, key)[0]:
                return True
            if value_matches(keyword, child):
                return True
        return False
    if isinstance(value, list):
        return any(value_matches(keyword, child) for child in value)
    text = _scalar_text(value)
    if text is None:
        return False
    return fuzzy_match(keyword, text)[0]


def record_matches(record: str, keywords: Sequence[str]) -> bool:
    """A record matches when it parses as JSON and every keyword hits somewhere."""
    try:
        parsed = json.loads(record)
    except (json.JSONDecodeError, ValueError):
        return False
    return all(value_matches(keyword, parsed) for keyword in keywords)


def filter_records(records: Sequence[str], filter_text: str) -> list[str]:
    keywords = keywords_of(filter_text)
    if not keywords:
        return list(records)
    return [record for record in records if record_matches(record, keywords)]


def filter_names(names: Sequence[str], filter_text: str) -> list[str]:
    keywords = keywords_of(filter_text)
    if not keywords:
        return list(names)
    return [name for name in names if all(fuzzy_match(keyword, name)[0] for keyword in keywords)]


def highlight_indices(text: str, filter_text: str) -> list[int]:
    """Indices of ``text`` matched by any keyword, for display."""
    hits: set[int] = set()
    for keyword in keywords_of(filter_text):
        matched, indices = fuzzy_match(keyword, text)
        if matched:
            hits.update(indices)
    return sorted(hits)
