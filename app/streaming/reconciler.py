"""Recovers key/value pairs from a record span that is not valid JSON yet."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from app.streaming.scanner import count_unescaped_quotes, find_string_end, skip_whitespace


def reconcile_partial_record(span: str) -> dict[str, str] | None:
    """Extract every textually complete ``"key": "value"`` pair from ``span``.

    Tries to auto-complete the span into a parseable object first and falls
    back to tokenizing it pair by pair.

    Returns:
        The recovered mapping, or None when nothing is recoverable yet.
    """
    recovered = _auto_complete(span)
    if recovered is None:
        recovered = dict(iter_string_pairs(span))
    return recovered or None


def _auto_complete(span: str) -> dict[str, str] | None:
    closed_open_string = False
    candidate = span
    if not span.endswith("}"):
        closed_open_string = count_unescaped_quotes(span) % 2 == 1
        if closed_open_string:
            candidate += '"'
        candidate += "}"

    try:
        pairs = json.loads(candidate, object_pairs_hook=list)
    except json.JSONDecodeError:
        return None
    if not isinstance(pairs, list):
        return None

    # The appended quote terminated the last value; it is not complete yet.
    if closed_open_string:
        pairs = pairs[:-1]
    return {key: value for key, value in pairs if isinstance(value, str)}


def iter_string_pairs(span: str) -> Iterator[tuple[str, str]]:
    """Yield top-level members of ``span`` whose key and value are both
    terminated string literals.

    Members with non-string values and anything nested inside an inner
    object or array are skipped.
    """
    depth = 0
    index = 0
    length = len(span)
    while index < length:
        char = span[index]
        if char == '"':
            key_end = find_string_end(span, index)
            if key_end is None:
                return
            if depth == 1:
                pair_end = _read_pair(span, index, key_end)
                if pair_end is not None:
                    end, key, value = pair_end
                    if key is not None and value is not None:
                        yield key, value
                    index = end + 1
                    continue
                if _value_is_unterminated(span, key_end):
                    return
            index = key_end + 1
            continue
        if char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
        index += 1


def _read_pair(span: str, key_start: int, key_end: int) -> tuple[int, str | None, str | None] | None:
    colon = skip_whitespace(span, key_end + 1)
    if colon >= len(span) or span[colon] != ":":
        return None
    value_start = skip_whitespace(span, colon + 1)
    if value_start >= len(span) or span[value_start] != '"':
        return None
    value_end = find_string_end(span, value_start)
    if value_end is None:
        return None
    key = _decode(span[key_start:key_end + 1])
    value = _decode(span[value_start:value_end + 1])
    return value_end, key, value


def _value_is_unterminated(span: str, key_end: int) -> bool:
    colon = skip_whitespace(span, key_end + 1)
    if colon >= len(span) or span[colon] != ":":
        return False
    value_start = skip_whitespace(span, colon + 1)
    return (
        value_start < len(span)
        and span[value_start] == '"'
        and find_string_end(span, value_start) is None
    )


def _decode(literal: str) -> Any:
    try:
        return json.loads(literal, strict=False)
    except json.JSONDecodeError:
        return None
