"""Tests for pi.mdtext.walker -- token dispatch into the renderer."""

from __future__ import annotations

from markdown_it import MarkdownIt

from pi.mdtext.nodes import Scope, Text
from pi.mdtext.renderer import TextRenderer
from pi.mdtext.walker import MarkdownWalker


def _walk(md_text: str, **kwargs):
    return MarkdownWalker(TextRenderer(**kwargs)).walk(md_text)


class TestMarkdownWalker:
    def test_all_scopes_closed_after_walk(self) -> None:
        out = _walk("### Deep\n\ntext")
        assert out.depth == 0

    def test_ordered_list_uses_bullets(self) -> None:
        out = _walk("1. a\n2. b")
        assert out.nodes == [
            Scope("  * ", "    ", [Text("a")]),
            Scope("  * ", "    ", [Text("b")]),
        ]

    def test_loose_list_item_paragraphs(self) -> None:
        out = _walk("- a\n\n  more\n- b")
        first = out.nodes[0]
        assert isinstance(first, Scope)
        assert first.children[0] == Text("a")
        assert Text("more") in first.children

    def test_whitespace_only_document(self) -> None:
        assert not _walk("   \n\n  ")

    def test_custom_parser(self) -> None:
        walker = MarkdownWalker(TextRenderer(), MarkdownIt("commonmark"))
        assert walker.walk("~~x~~").nodes == [Text("~~x~~")]

    def test_table_cells_are_rendered_inline(self) -> None:
        out = _walk("| *a* |\n|---|\n| b |")
        texts = [n.text for n in out.nodes if isinstance(n, Text)]
        assert "|\x02*a*\x02|" in texts
