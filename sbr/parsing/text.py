"""Text primitives shared by the rule and fact parsers.

Keyword matching happens on a case-folded copy of the text while slices
are taken from the original, so folding must never change the length
of a string: offsets found in ``fold_case(s)`` are valid in ``s``.
"""

from __future__ import annotations

import re

from sbr.schema import WHITESPACE

__all__ = [
    "WHITESPACE",
    "FC_MARKER",
    "fold_case",
    "trim",
    "find_marker",
    "rfind_marker",
    "parse_certainty",
    "parse_count",
]

# Certainty factor marker, "FC=" with optional blanks around "="
FC_MARKER = re.compile(r"fc[ \t]*=")

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")


def fold_case(s: str) -> str:
    """Lower-case ``s`` one character at a time, preserving its length.

    Characters whose lower-case form is longer than one code point
    (e.g. U+0130) are kept unchanged.
    """
    return "".join(_fold_char(c) for c in s)


def _fold_char(c: str) -> str:
    lower = c.lower()
    return lower if len(lower) == 1 else c


def trim(s: str) -> str:
    """Strip leading and trailing whitespace."""
    return s.strip(WHITESPACE)


def find_marker(folded: str, marker: re.Pattern[str], start: int = 0) -> tuple[int, int] | None:
    """Return the (start, end) span of the first match at or after ``start``."""
    match = marker.search(folded, start)
    if match is None:
        return None
    return match.span()


def rfind_marker(folded: str, marker: re.Pattern[str]) -> tuple[int, int] | None:
    """Return the (start, end) span of the last match of ``marker``."""
    last = None
    for match in marker.finditer(folded):
        last = match
    if last is None:
        return None
    return last.span()


def parse_certainty(text: str) -> float:
    """Parse a decimal certainty factor such as ``0.7``, ``-.5`` or ``1``.

    Raises:
        ValueError: If ``text`` is not a plain decimal number
    """
    value = trim(text)
    if not _NUMBER.fullmatch(value):
        raise ValueError(f"Not a decimal number: {value!r}")
    return float(value)


def parse_count(text: str) -> int:
    """Parse a non-negative record count header.

    Raises:
        ValueError: If ``text`` is not an integer or is negative
    """
    value = trim(text)
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"Not an integer: {value!r}")
    count = int(value)
    if count < 0:
        raise ValueError(f"Count must not be negative: {count}")
    return count
