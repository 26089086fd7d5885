"""Text renderer: one handler per document node kind.

Block handlers append to a :class:`~pi.mdtext.nodes.Fragment`; inline
handlers return strings that the walker concatenates.  Container content
that may turn out empty is passed as a zero-argument callable returning a
fragment, or ``None`` when the region was cancelled; a cancelled region
leaves no trace in the output.

Document text never carries sentinel characters: handlers that take text
from the source strip them before adding marks of their own.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pi.mdtext.marks import LINE_BREAK, NBSP, TABLE_CELL, TABLE_ROW, strip_marks
from pi.mdtext.nodes import Fragment, Rule
from pi.mdtext.table import Align, TableAlignment, header_rows, layout_table, split_grid

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_YELLOW = "\x1b[33m"
_BLUE = "\x1b[34m"
_MAGENTA = "\x1b[35m"
_WHITE = "\x1b[37m"

Content = Callable[[], Optional[Fragment]]

QUOTE_PREFIX = "> "
LIST_ITEM_PREFIX = "  * "
LIST_ITEM_CONTINUATION = "    "
HEADING_OPEN = "--["
HEADING_CLOSE = "]--"
HEADING_INDENT = "    "


class TextRenderer:
    """Renders document nodes for a fixed-width terminal."""

    def __init__(self, color: bool = False, table_alignment: TableAlignment | None = None) -> None:
        self.color = color
        self.table_alignment = table_alignment or TableAlignment()

    def _paint(self, escape: str, text: str, fallback: str = "") -> str:
        if self.color:
            return f"{escape}{text}{_RESET}"
        return f"{fallback}{text}{fallback}"

    # -- block level --------------------------------------------------------

    def block_code(self, out: Fragment, code: str, lang: str = "") -> None:
        if code.endswith("\n"):
            code = code[:-1]
        out.ensure_blank_line()
        for line in strip_marks(code).split("\n"):
            line = line.replace("\t", "   ").replace(" ", NBSP)
            out.write(self._paint(_GREEN, line))
            out.line_break()
        out.ensure_blank_line()

    def block_quote(self, out: Fragment, content: Fragment) -> None:
        out.ensure_blank_line()
        out.open_scope(QUOTE_PREFIX, QUOTE_PREFIX)
        out.extend(content.trimmed())
        out.close_scope()

    def block_html(self, out: Fragment, html: str) -> None:
        out.ensure_blank_line()
        out.write(strip_marks(html).replace("\n", LINE_BREAK))

    def heading(self, out: Fragment, content: Content, level: int, depth: int) -> int:
        """Render a level-*level* heading and return the new heading depth.

        Headings nest what follows them: after a level ``L`` heading the
        output sits inside ``L`` open indent scopes until a heading of the
        same or a higher level closes them again.
        """
        title = content()
        if title is None:
            logger.debug("heading level %d cancelled", level)
            return depth

        out.ensure_blank_line()
        level -= 1
        while depth > level:
            out.close_scope()
            depth -= 1
        out.open_scope(f"{HEADING_OPEN} ", HEADING_INDENT)
        if self.color:
            out.write(_BOLD)
        out.extend(title.nodes)
        if self.color:
            out.write(_RESET)
        out.write(NBSP + HEADING_CLOSE)
        out.close_scope()
        while depth <= level:
            out.open_scope(HEADING_INDENT, HEADING_INDENT)
            depth += 1
        out.ensure_blank_line()
        return depth

    def hrule(self, out: Fragment) -> None:
        out.ensure_blank_line()
        out.append(Rule("-"))
        out.ensure_blank_line()

    def list_block(self, out: Fragment, items: Content) -> None:
        rendered = items()
        if rendered is None:
            logger.debug("list cancelled")
            return
        out.ensure_newline()
        out.extend(rendered.nodes)

    def list_item(self, out: Fragment, content: Fragment) -> None:
        out.ensure_newline()
        out.open_scope(LIST_ITEM_PREFIX, LIST_ITEM_CONTINUATION)
        out.extend(content.trimmed())
        out.close_scope()

    def paragraph(self, out: Fragment, content: Content) -> None:
        rendered = content()
        if rendered is None:
            logger.debug("paragraph cancelled")
            return
        out.ensure_blank_line()
        out.extend(rendered.nodes)

    def table(
        self,
        out: Fragment,
        header: str,
        body: str,
        markup_aligns: list[Align | None] | None = None,
    ) -> None:
        out.ensure_blank_line()
        lines = layout_table(header_rows(header), split_grid(body), self.table_alignment, markup_aligns)
        for line in lines:
            out.write(line.replace(" ", NBSP))
            out.line_break()

    def table_row(self, cells: str) -> str:
        return cells + TABLE_ROW

    def table_cell(self, text: str) -> str:
        return text + TABLE_CELL

    def footnotes(self, out: Fragment, items: Content) -> None:
        rendered = items()
        if rendered is None:
            logger.debug("footnotes cancelled")
            return
        out.ensure_blank_line()
        out.extend(rendered.nodes)

    def footnote_item(self, out: Fragment, name: str, content: Fragment) -> None:
        out.ensure_newline()
        out.extend(content.trimmed())
        out.write(f"[{strip_marks(name)}]")

    def finish(self, out: Fragment, depth: int) -> None:
        """Close the heading scopes still open at the end of a container."""
        while depth > 0:
            out.close_scope()
            depth -= 1

    # -- inline level -------------------------------------------------------

    def normal_text(self, text: str) -> str:
        return strip_marks(text)

    def entity(self, entity: str) -> str:
        return strip_marks(entity)

    def raw_html_tag(self, tag: str) -> str:
        return strip_marks(tag)

    def line_break(self) -> str:
        return LINE_BREAK

    def code_span(self, text: str) -> str:
        return self._paint(_GREEN, strip_marks(text).replace(" ", NBSP), '"')

    def emphasis(self, text: str) -> str:
        return self._paint(_YELLOW, text, "*")

    def double_emphasis(self, text: str) -> str:
        return self._paint(_BOLD, text, "**")

    def triple_emphasis(self, text: str) -> str:
        return self._paint(_BOLD + _RED, text, "***")

    def strikethrough(self, text: str) -> str:
        return self._paint(_WHITE, text, "~~")

    def autolink(self, link: str) -> str:
        return self._paint(_BLUE, strip_marks(link))

    def link(self, link: str, title: str, content: str) -> str:
        link, title = strip_marks(link), strip_marks(title)
        if content and content != link:
            text = f"[{content}] {link}"
        elif title and title != link:
            text = f"[{title}] {link}"
        else:
            text = link
        return self._paint(_BLUE, text)

    def image(self, link: str, title: str, alt: str) -> str:
        link, title, alt = strip_marks(link), strip_marks(title), strip_marks(alt)
        if alt:
            text = f"[{alt}] {link}"
        elif title:
            text = f"[{title}] {link}"
        else:
            text = link
        return self._paint(_MAGENTA, text)

    def footnote_ref(self, ref: str, number: int) -> str:
        return f"{strip_marks(ref)} [{number}]"
