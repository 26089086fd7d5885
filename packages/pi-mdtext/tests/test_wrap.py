"""Tests for pi.mdtext.wrap -- greedy word wrap."""

from __future__ import annotations

from pi.mdtext.marks import HRULE, LINE_BREAK, NBSP
from pi.mdtext.width import strip_ansi, visible_width
from pi.mdtext.wrap import wrap


def _lines(text: str) -> list[str]:
    """Split wrapped output into lines, dropping the final terminator."""
    assert text.endswith(LINE_BREAK)
    return text[:-1].split(LINE_BREAK)


class TestWrapBasics:
    """Greedy wrapping of plain words."""

    def test_empty_input_produces_nothing(self) -> None:
        assert wrap("", 20) == ""

    def test_short_line_is_terminated(self) -> None:
        assert wrap("Basic Test", 80) == f"Basic Test{LINE_BREAK}"

    def test_words_move_to_next_line(self) -> None:
        assert _lines(wrap("aaa bbb ccc", 8)) == ["aaa bbb", "ccc"]

    def test_line_stays_below_width(self) -> None:
        # "aaaa bbb" would be exactly 8 wide, which already breaks.
        assert _lines(wrap("aaaa bbb", 8)) == ["aaaa", "bbb"]

    def test_repeated_spaces_collapse(self) -> None:
        assert wrap("a    b", 20) == f"a b{LINE_BREAK}"

    def test_long_word_is_not_split(self) -> None:
        lines = _lines(wrap("x " + "y" * 30 + " z", 10))
        assert lines == ["x", "y" * 30, "z"]

    def test_trailing_line_break_adds_no_empty_line(self) -> None:
        assert wrap(f"one{LINE_BREAK}", 20) == f"one{LINE_BREAK}"

    def test_internal_line_breaks_are_kept(self) -> None:
        assert _lines(wrap(f"one{LINE_BREAK}{LINE_BREAK}two", 20)) == ["one", "", "two"]

    def test_nbsp_keeps_words_together(self) -> None:
        lines = _lines(wrap(f"aa bb{NBSP}cc", 7))
        assert lines == ["aa", f"bb{NBSP}cc"]


class TestWrapPrefixes:
    """First and continuation prefixes."""

    def test_first_line_uses_first_prefix(self) -> None:
        lines = _lines(wrap("aaa bbb ccc ddd", 12, "  * ", "    "))
        assert lines == ["  * aaa bbb", "    ccc ddd"]

    def test_prefix_counts_toward_width(self) -> None:
        lines = _lines(wrap("aaa bbb", 8, "> ", "> "))
        assert lines == ["> aaa", "> bbb"]

    def test_hard_break_line_uses_continuation_prefix(self) -> None:
        lines = _lines(wrap(f"one{LINE_BREAK}two", 20, "--[ ", "    "))
        assert lines == ["--[ one", "    two"]


class TestWrapEscapes:
    """ANSI escapes are carried along but never measured."""

    def test_colored_text_breaks_like_plain_text(self) -> None:
        plain = "alpha beta gamma delta epsilon"
        colored = "\x1b[33malpha\x1b[0m beta \x1b[1mgamma delta\x1b[0m epsilon"
        assert strip_ansi(wrap(colored, 12)) == wrap(plain, 12)

    def test_escape_sequences_survive_intact(self) -> None:
        out = wrap("\x1b[32mgreen\x1b[0m words here", 8)
        assert "\x1b[32mgreen\x1b[0m" in out

    def test_no_line_exceeds_width(self) -> None:
        text = " ".join(f"\x1b[1mw{i}\x1b[0m" for i in range(40))
        for line in _lines(wrap(text, 15)):
            assert visible_width(line) <= 15


class TestWrapRule:
    """A lone rule marker expands to the full width."""

    def test_rule_fills_width(self) -> None:
        assert wrap(f"{HRULE}-", 10) == "-" * 10 + LINE_BREAK

    def test_rule_counts_prefix(self) -> None:
        assert wrap(f"{HRULE}=", 6, "> ", "> ") == "> ====" + LINE_BREAK

    def test_rule_after_text_uses_continuation_prefix(self) -> None:
        lines = _lines(wrap(f"text{LINE_BREAK}{HRULE}-", 6, "1 ", "2 "))
        assert lines == ["1 text", "2 ----"]
