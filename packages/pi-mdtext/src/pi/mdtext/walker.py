"""Markdown walker -- drives a :class:`TextRenderer` from markdown-it tokens.

markdown-it-py produces a flat token list with an open/close tag model
(``heading_open`` / ``heading_close``); inline content lives in the
``children`` of ``inline`` tokens.  The walker visits block tokens in
document order and calls the renderer handler for each node kind, handing
containers their content either as an already rendered fragment or as a
callable that renders it on demand.
"""

from __future__ import annotations

import logging
import re
from functools import partial

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin

from pi.mdtext.nodes import Fragment
from pi.mdtext.renderer import TextRenderer
from pi.mdtext.table import Align

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# markdown-it singleton (GFM tables, strikethrough, linkify, footnotes)
# ---------------------------------------------------------------------------

_md_parser = MarkdownIt("gfm-like").use(footnote_plugin)

_ALIGN_RE = re.compile(r"text-align:\s*(left|center|right)")

# Inline span openers and the token that closes each of them.
_SPANS = {
    "em_open": "em_close",
    "strong_open": "strong_close",
    "s_open": "s_close",
    "link_open": "link_close",
}

_AUTOLINK_MARKUP = ("autolink", "linkify")


class MarkdownWalker:
    """Walks parsed markdown and renders it through *renderer*."""

    def __init__(self, renderer: TextRenderer, parser: MarkdownIt | None = None) -> None:
        self._renderer = renderer
        self._parser = parser or _md_parser

    def walk(self, markdown: str) -> Fragment:
        """Parse *markdown* and return the rendered fragment (all scopes closed)."""
        tokens = self._parser.parse(markdown)
        return self._render_blocks(tokens)

    # -- block-level token dispatch -----------------------------------------

    def _render_blocks(self, tokens: list[Token]) -> Fragment:
        """Render a run of block tokens into a new fragment.

        Headings opened here are closed before returning, so a heading
        inside a quote or list item only nests the rest of that container.
        """
        r = self._renderer
        out = Fragment()
        depth = 0
        i = 0
        n = len(tokens)

        while i < n:
            tok = tokens[i]
            t = tok.type

            if t == "heading_open":
                level = int(tok.tag[1]) if tok.tag and tok.tag[0] == "h" else 1
                inline_tok = tokens[i + 1] if i + 1 < n else None
                depth = r.heading(out, partial(self._inline_fragment, inline_tok), level, depth)
                i = self._skip_to_close(tokens, i, "heading_close") + 1
                continue

            if t == "paragraph_open":
                inline_tok = tokens[i + 1] if i + 1 < n else None
                if tok.hidden:
                    # Tight list item: the text goes straight into the item.
                    out.write(self._render_inline(inline_tok))
                else:
                    r.paragraph(out, partial(self._inline_fragment, inline_tok))
                i = self._skip_to_close(tokens, i, "paragraph_close") + 1
                continue

            if t in ("fence", "code_block"):
                lang = tok.info.strip() if tok.info else ""
                r.block_code(out, tok.content, lang)
                i += 1
                continue

            if t in ("bullet_list_open", "ordered_list_open"):
                close_type = t.replace("_open", "_close")
                close_idx = self._find_matching_close(tokens, i, t, close_type)
                r.list_block(out, partial(self._render_list_items, tokens[i + 1 : close_idx]))
                i = close_idx + 1
                continue

            if t == "blockquote_open":
                close_idx = self._find_matching_close(tokens, i, t, "blockquote_close")
                r.block_quote(out, self._render_blocks(tokens[i + 1 : close_idx]))
                i = close_idx + 1
                continue

            if t == "hr":
                r.hrule(out)
                i += 1
                continue

            if t == "table_open":
                close_idx = self._find_matching_close(tokens, i, t, "table_close")
                header, body, aligns = self._collect_table(tokens[i + 1 : close_idx])
                r.table(out, header, body, aligns)
                i = close_idx + 1
                continue

            if t == "html_block":
                r.block_html(out, tok.content)
                i += 1
                continue

            if t == "footnote_block_open":
                close_idx = self._find_matching_close(tokens, i, t, "footnote_block_close")
                r.footnotes(out, partial(self._render_footnotes, tokens[i + 1 : close_idx]))
                i = close_idx + 1
                continue

            if t == "inline":
                out.write(self._render_inline(tok))
                i += 1
                continue

            if not t.endswith("_close") and t != "footnote_anchor":
                logger.debug("skipping unhandled token %s", t)
            i += 1

        r.finish(out, depth)
        return out

    def _inline_fragment(self, tok: Token | None) -> Fragment | None:
        """Render an inline token as a fragment; ``None`` when it shows nothing."""
        text = self._render_inline(tok)
        if not text.strip():
            return None
        out = Fragment()
        out.write(text)
        return out

    # -- lists --------------------------------------------------------------

    def _render_list_items(self, tokens: list[Token]) -> Fragment | None:
        out = Fragment()
        i = 0
        n = len(tokens)
        while i < n:
            if tokens[i].type == "list_item_open":
                close_idx = self._find_matching_close(tokens, i, "list_item_open", "list_item_close")
                self._renderer.list_item(out, self._render_blocks(tokens[i + 1 : close_idx]))
                i = close_idx + 1
                continue
            i += 1
        return out if out else None

    # -- footnotes ----------------------------------------------------------

    def _render_footnotes(self, tokens: list[Token]) -> Fragment | None:
        out = Fragment()
        i = 0
        n = len(tokens)
        while i < n:
            tok = tokens[i]
            if tok.type == "footnote_open":
                close_idx = self._find_matching_close(tokens, i, "footnote_open", "footnote_close")
                meta = tok.meta or {}
                name = meta.get("label") or str(meta.get("id", 0) + 1)
                self._renderer.footnote_item(out, name, self._render_blocks(tokens[i + 1 : close_idx]))
                i = close_idx + 1
                continue
            i += 1
        return out if out else None

    # -- tables -------------------------------------------------------------

    def _collect_table(self, tokens: list[Token]) -> tuple[str, str, list[Align | None]]:
        """Build the header and body row/cell sub-streams of a table."""
        r = self._renderer
        header: list[str] = []
        body: list[str] = []
        aligns: list[Align | None] = []
        cells: list[str] = []
        in_thead = False
        i = 0
        n = len(tokens)

        while i < n:
            tok = tokens[i]
            t = tok.type

            if t == "thead_open":
                in_thead = True
            elif t == "thead_close":
                in_thead = False
            elif t == "tr_open":
                cells = []
            elif t == "tr_close":
                (header if in_thead else body).append(r.table_row("".join(cells)))
            elif t in ("th_open", "td_open"):
                inline_tok = tokens[i + 1] if i + 1 < n else None
                cell_text = ""
                if inline_tok is not None and inline_tok.type == "inline":
                    cell_text = self._render_inline(inline_tok)
                    i += 1
                if t == "th_open":
                    aligns.append(_cell_align(tok))
                cells.append(r.table_cell(cell_text))
            i += 1

        return "".join(header), "".join(body), aligns

    # -- inline rendering ---------------------------------------------------

    def _render_inline(self, tok: Token | None) -> str:
        """Render an ``inline`` token's children into a flat styled string."""
        if tok is None:
            return ""
        if tok.children is None:
            return self._renderer.normal_text(tok.content)
        return self._render_spans(tok.children)

    def _render_spans(self, children: list[Token]) -> str:
        r = self._renderer
        parts: list[str] = []
        i = 0
        n = len(children)

        while i < n:
            child = children[i]
            ct = child.type

            if ct in _SPANS:
                close_idx = self._find_matching_close(children, i, ct, _SPANS[ct])
                parts.append(self._render_span(child, children[i + 1 : close_idx]))
                i = close_idx + 1
                continue

            if ct == "text":
                parts.append(r.normal_text(child.content))
            elif ct == "text_special":
                if child.info == "entity":
                    parts.append(r.entity(child.content))
                else:
                    parts.append(r.normal_text(child.content))
            elif ct == "softbreak":
                parts.append(r.normal_text("\n"))
            elif ct == "hardbreak":
                parts.append(r.line_break())
            elif ct == "code_inline":
                parts.append(r.code_span(child.content))
            elif ct == "html_inline":
                parts.append(r.raw_html_tag(child.content))
            elif ct == "image":
                src = str(child.attrs.get("src", ""))
                title = str(child.attrs.get("title", ""))
                parts.append(r.image(src, title, child.content))
            elif ct == "footnote_ref":
                meta = child.meta or {}
                number = meta.get("id", 0) + 1
                parts.append(r.footnote_ref(meta.get("label") or str(number), number))
            elif child.content:
                parts.append(r.normal_text(child.content))
            i += 1

        return "".join(parts)

    def _render_span(self, open_tok: Token, inner: list[Token]) -> str:
        r = self._renderer
        t = open_tok.type

        if t == "link_open":
            content = self._render_spans(inner)
            href = str(open_tok.attrs.get("href", ""))
            if open_tok.markup in _AUTOLINK_MARKUP:
                return r.autolink(content or href)
            return r.link(href, str(open_tok.attrs.get("title", "")), content)

        if t == "s_open":
            return r.strikethrough(self._render_spans(inner))

        # ***text*** parses as em wrapping strong (or strong wrapping em).
        nested = "strong_open" if t == "em_open" else "em_open"
        if inner and inner[0].type == nested:
            close_idx = self._find_matching_close(inner, 0, nested, _SPANS[nested])
            if close_idx == len(inner) - 1:
                return r.triple_emphasis(self._render_spans(inner[1:-1]))

        text = self._render_spans(inner)
        if t == "em_open":
            return r.emphasis(text)
        return r.double_emphasis(text)

    # -- token navigation helpers -------------------------------------------

    @staticmethod
    def _skip_to_close(tokens: list[Token], start: int, close_type: str) -> int:
        """Advance index past the next token of *close_type*."""
        i = start + 1
        while i < len(tokens):
            if tokens[i].type == close_type:
                return i
            i += 1
        return len(tokens) - 1

    @staticmethod
    def _find_matching_close(
        tokens: list[Token], start: int, open_type: str, close_type: str
    ) -> int:
        """Find the matching close token for a given open token, respecting nesting."""
        depth = 0
        i = start
        while i < len(tokens):
            if tokens[i].type == open_type:
                depth += 1
            elif tokens[i].type == close_type:
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        return len(tokens) - 1


def _cell_align(tok: Token) -> Align | None:
    style = tok.attrs.get("style")
    if not style:
        return None
    match = _ALIGN_RE.search(str(style))
    return Align(match.group(1)) if match else None
