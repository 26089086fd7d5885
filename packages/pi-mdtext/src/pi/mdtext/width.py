"""Terminal width measurement for wrapped output.

Measures how many terminal cells text occupies once ANSI escape sequences are
removed, and splits words into their visible text and the escapes woven
through it so that wrapping never has to rescan for escape bytes.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

import grapheme
import wcwidth as _wcwidth

from pi.mdtext.marks import NBSP

# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

# SGR sequences only: ESC[ <params> m.  These are what the renderer emits.
SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Sentinel NBSP and a bare ESC -> 1, TAB -> 3
    2. Other control characters and combining marks -> 0
    3. Emoji (VS16, ZWJ sequences, skin tones, flags) -> 2
    4. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        if g == NBSP or g == "\x1b":
            return 1
        if g == "\t":
            return 3
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    codepoints = list(g)
    for ch in codepoints:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(codepoints[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(codepoints[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(codepoints[0]), 0)


# ---------------------------------------------------------------------------
# Public measurement
# ---------------------------------------------------------------------------


def cell_width(text: str) -> int:
    """Width of escape-free *text* in terminal cells.

    * NBSP marks count as one column each.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E or ch == NBSP for ch in text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(text))
    return _cache_width(text, total)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    Strips ANSI escape sequences before measuring; tabs count as 3 columns.
    """
    if not text:
        return 0
    return cell_width(_STRIP_RE.sub("", text))


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


# ---------------------------------------------------------------------------
# Word
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Word:
    """A word split into what the terminal shows and the escapes around it.

    ``decorations`` holds ``(offset, escape)`` pairs where *offset* indexes
    into ``visible_text``; several escapes may share an offset.  An escape
    introducer that is not part of a complete SGR sequence stays in
    ``visible_text`` and is measured like any other character.
    """

    visible_text: str
    decorations: tuple[tuple[int, str], ...] = ()

    @classmethod
    def parse(cls, raw: str) -> Word:
        if "\x1b" not in raw:
            return cls(raw)
        visible: list[str] = []
        decorations: list[tuple[int, str]] = []
        offset = 0
        pos = 0
        for match in SGR_RE.finditer(raw):
            chunk = raw[pos : match.start()]
            visible.append(chunk)
            offset += len(chunk)
            decorations.append((offset, match.group()))
            pos = match.end()
        visible.append(raw[pos:])
        return cls("".join(visible), tuple(decorations))

    @property
    def width(self) -> int:
        return cell_width(self.visible_text)

    def __str__(self) -> str:
        if not self.decorations:
            return self.visible_text
        parts: list[str] = []
        pos = 0
        for offset, escape in self.decorations:
            parts.append(self.visible_text[pos:offset])
            parts.append(escape)
            pos = offset
        parts.append(self.visible_text[pos:])
        return "".join(parts)
