"""Leading metadata and summary markers.

A document may start with ``Name: value`` lines ended by a blank line::

    Title: Release notes
    Author: Ops

    Body text...

If any of those leading lines has no ``": "`` the document is taken to have
no metadata at all.

After the metadata, a line holding only ``///`` marks the end of a summary:
the text above it, without surrounding blank lines, becomes a ``Summary``
item.  With a single marker line the summary stays in the body as well
(soft break); with two marker lines in a row it is removed from the body
(hard break).
"""

from __future__ import annotations

SUMMARY = "Summary"
SUMMARY_MARK = "\n///\n"
_HARD_BREAK_TAIL = "///\n"

Metadata = list[tuple[str, str]]


def markdown_metadata(markdown: str) -> tuple[Metadata, int]:
    """Return the metadata pairs and the position where the body starts."""
    metadata: Metadata = []
    pos = 0
    for line in markdown.split("\n"):
        stripped = line.strip(" ")
        if not stripped:
            break
        colon = stripped.find(": ")
        if colon == -1:
            metadata = []
            pos = 0
            break
        name = stripped[:colon].strip(" ")
        value = stripped[colon + 1 :].strip(" ")
        metadata.append((name, value))
        pos += len(line) + 1
    pos = min(pos, len(markdown))

    mark = markdown.find(SUMMARY_MARK, pos)
    if mark != -1:
        metadata.append((SUMMARY, markdown[pos:mark].strip("\n")))
        after = mark + len(SUMMARY_MARK)
        if markdown[after : after + len(_HARD_BREAK_TAIL)] == _HARD_BREAK_TAIL:
            pos = after + len(_HARD_BREAK_TAIL)
    return metadata, pos


def strip_summary_marks(markdown: str) -> str:
    """Drop soft-break marker lines so the summary reads as ordinary body text."""
    return markdown.replace(SUMMARY_MARK, "\n")
