"""Tests for pi.mdtext.width -- visible width measurement and words."""

from __future__ import annotations

from pi.mdtext.marks import NBSP
from pi.mdtext.width import Word, cell_width, strip_ansi, visible_width


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        # Bold "hi" then reset -- only "hi" contributes width.
        assert visible_width("\x1b[1mhi\x1b[0m") == 2

    def test_multiple_ansi_codes(self) -> None:
        assert visible_width("\x1b[1m\x1b[31mabc\x1b[0m") == 3

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        # "A" (1) + U+4E16 (2) + "B" (1) = 4
        assert visible_width("A世B") == 4

    def test_tab_counts_as_three(self) -> None:
        assert visible_width("\t") == 3

    def test_osc8_hyperlink_does_not_count(self) -> None:
        text = "\x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert visible_width(text) == 4

    def test_nbsp_mark_counts_as_one(self) -> None:
        assert visible_width(f"a{NBSP}b") == 3


class TestCellWidth:
    """cell_width measures text that has no escapes left in it."""

    def test_stray_escape_introducer_is_visible(self) -> None:
        assert cell_width("\x1bab") == 3

    def test_combining_mark_adds_nothing(self) -> None:
        assert cell_width("e\u0301") == 1

    def test_strip_ansi_keeps_text(self) -> None:
        assert strip_ansi("\x1b[32mgo\x1b[0m") == "go"


# ---------------------------------------------------------------------------
# Word
# ---------------------------------------------------------------------------


class TestWord:
    """Words separate visible text from the escapes woven through them."""

    def test_plain_word_has_no_decorations(self) -> None:
        word = Word.parse("hello")
        assert word.visible_text == "hello"
        assert word.decorations == ()
        assert word.width == 5

    def test_escapes_become_decorations(self) -> None:
        word = Word.parse("\x1b[1mbo\x1b[33mld\x1b[0m")
        assert word.visible_text == "bold"
        assert word.decorations == ((0, "\x1b[1m"), (2, "\x1b[33m"), (4, "\x1b[0m"))
        assert word.width == 4

    def test_str_restores_raw_text(self) -> None:
        raw = "\x1b[1m\x1b[31mred\x1b[0m!"
        assert str(Word.parse(raw)) == raw

    def test_unterminated_escape_counts_as_visible(self) -> None:
        word = Word.parse("ab\x1b[12")
        assert word.decorations == ()
        assert word.visible_text == "ab\x1b[12"
        assert word.width == 6
