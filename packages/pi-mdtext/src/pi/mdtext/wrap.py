"""Greedy word wrap for one prefix-resolved region of a marked stream."""

from __future__ import annotations

from pi.mdtext.marks import HRULE, LINE_BREAK
from pi.mdtext.width import Word, cell_width


def wrap(text: str, width: int, prefix_first: str = "", prefix_continuation: str = "") -> str:
    """Word-wrap *text* to *width* columns.

    *text* may contain line-break marks (kept as hard breaks) and ANSI
    escapes (copied verbatim, never counted).  The first line produced gets
    *prefix_first*, every later one *prefix_continuation*.  A word is only
    appended to a line while the line stays narrower than *width*; a word
    that is too long on its own still gets a line to itself, unsplit.

    Every produced line, including the last, ends in a line-break mark.  A
    single line-break mark at the very end of *text* does not add an empty
    line.
    """
    if not text:
        return ""
    if text.endswith(LINE_BREAK):
        text = text[:-1]

    out: list[str] = []

    def line_prefix() -> str:
        return prefix_continuation if out else prefix_first

    for line in text.split(LINE_BREAK):
        if len(line) == 2 and line[0] == HRULE:
            out.append(_rule(line_prefix(), line[1], width))
            out.append(LINE_BREAK)
            continue

        line_len = 0
        start = True
        for raw in line.split(" "):
            if not raw:
                continue
            word = Word.parse(raw)
            word_len = word.width
            if start:
                prefix = line_prefix()
                out.append(prefix)
                out.append(raw)
                line_len = cell_width(prefix) + word_len
                start = False
            elif line_len + 1 + word_len >= width:
                out.append(LINE_BREAK)
                out.append(prefix_continuation)
                out.append(raw)
                line_len = cell_width(prefix_continuation) + word_len
            else:
                out.append(" ")
                out.append(raw)
                line_len += 1 + word_len
        out.append(LINE_BREAK)

    return "".join(out)


def _rule(prefix: str, fill: str, width: int) -> str:
    length = cell_width(prefix)
    parts = [prefix]
    while length < width:
        parts.append(fill)
        length += 1
    return "".join(parts)
