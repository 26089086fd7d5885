"""Sentinel alphabet for marked streams.

A marked stream is flat text in which a handful of control characters stand
for structure that plain text cannot carry: forced line breaks, spaces that
must not be wrapped, nested indent scopes, table row/cell boundaries and
horizontal rules.  The renderer strips them from document text, so every
one in a stream is structure.
"""

from __future__ import annotations

LINE_BREAK = "\x01"
NBSP = "\x02"
INDENT_START = "\x03"
INDENT_FIRST = "\x04"
INDENT_CONTINUATION = "\x05"
INDENT_STOP = "\x06"
TABLE_ROW = "\x07"
TABLE_CELL = "\x08"
# \x09 and \x0a are TAB and LF and stay ordinary text.
HRULE = "\x0b"

ALL_MARKS = frozenset(
    (
        LINE_BREAK,
        NBSP,
        INDENT_START,
        INDENT_FIRST,
        INDENT_CONTINUATION,
        INDENT_STOP,
        TABLE_ROW,
        TABLE_CELL,
        HRULE,
    )
)

# Marks after which the stream is considered to be at the start of a line.
BREAK_MARKS = frozenset((LINE_BREAK, INDENT_CONTINUATION, INDENT_STOP))


def scope_header(prefix_first: str, prefix_continuation: str) -> str:
    """Return the opening marks of a scope with the given prefixes."""
    return f"{INDENT_START}{prefix_first}{INDENT_FIRST}{prefix_continuation}{INDENT_CONTINUATION}"


_STRIP_TABLE: dict[int, str | None] = {ord(mark): None for mark in ALL_MARKS}
_STRIP_TABLE[ord(NBSP)] = " "


def strip_marks(text: str) -> str:
    """Remove every sentinel from *text* (NBSP becomes a plain space)."""
    return text.translate(_STRIP_TABLE)


def resolve(text: str) -> str:
    """Turn the remaining sentinels of reflowed text into visible characters."""
    return text.replace(NBSP, " ").replace(LINE_BREAK, "\n")
