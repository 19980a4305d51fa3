"""Bounded string scanner shared by the record extractor and the reconciler.

Both the outer record scan and the reconciler's pair tokenizer need to know
whether a character sits inside a JSON string literal. Keeping that state
machine in one place means a quote escaped inside a value is treated the
same way by every tier of the extraction.
"""

from __future__ import annotations

_WHITESPACE = frozenset(" \t\r\n")


class StringScanner:
    """Tracks JSON string and escape state one character at a time."""

    __slots__ = ("in_string", "escape_pending")

    def __init__(self) -> None:
        self.in_string = False
        self.escape_pending = False

    def feed(self, char: str) -> bool:
        """Advance the state by one character.

        Returns:
            True if ``char`` is structural, i.e. outside any string literal
            and not a quote or escape character.
        """
        if self.escape_pending:
            self.escape_pending = False
            return False
        if char == "\\":
            self.escape_pending = True
            return False
        if char == '"':
            self.in_string = not self.in_string
            return False
        return not self.in_string


def find_string_end(text: str, start: int) -> int | None:
    """Return the index of the quote closing the string opened at ``start``.

    ``text[start]`` must be a quote. Returns None if the string is not
    terminated within ``text`` (including a dangling escape at the end).
    """
    index = start + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return index
        index += 1
    return None


def count_unescaped_quotes(text: str) -> int:
    """Count quote characters that open or close a string literal."""
    scanner = StringScanner()
    count = 0
    for char in text:
        before = scanner.in_string
        scanner.feed(char)
        if scanner.in_string != before:
            count += 1
    return count


def skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index
