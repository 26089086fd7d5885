"""Tests for pi.mdtext.stream and pi.mdtext.marks."""

from __future__ import annotations

import pytest

from pi.mdtext.marks import (
    HRULE,
    INDENT_CONTINUATION,
    INDENT_FIRST,
    INDENT_START,
    INDENT_STOP,
    LINE_BREAK,
    NBSP,
    resolve,
    scope_header,
    strip_marks,
)
from pi.mdtext.nodes import LineBreak, Rule, Scope, Text
from pi.mdtext.stream import decode, encode, find_scope_stop

_TREE = [
    Text("a"),
    Scope("> ", "> ", [Text("b"), Scope("  * ", "    ", [Text("c")])]),
    LineBreak(),
    Rule("-"),
]
_STREAM = (
    f"a{INDENT_START}> {INDENT_FIRST}> {INDENT_CONTINUATION}b"
    f"{INDENT_START}  * {INDENT_FIRST}    {INDENT_CONTINUATION}c{INDENT_STOP}"
    f"{INDENT_STOP}{LINE_BREAK}{HRULE}-"
)


class TestMarks:
    def test_scope_header_layout(self) -> None:
        assert scope_header("a", "b") == f"{INDENT_START}a{INDENT_FIRST}b{INDENT_CONTINUATION}"

    def test_resolve_turns_marks_into_text(self) -> None:
        assert resolve(f"a{NBSP}b{LINE_BREAK}") == "a b\n"

    def test_strip_marks_leaves_only_text(self) -> None:
        assert strip_marks(_STREAM) == "a> > b  *     c-"


class TestEncode:
    def test_nested_tree(self) -> None:
        assert encode(_TREE) == _STREAM

    def test_empty(self) -> None:
        assert encode([]) == ""


class TestDecode:
    def test_nested_stream(self) -> None:
        assert decode(_STREAM) == _TREE

    def test_plain_text(self) -> None:
        assert decode(f"x{LINE_BREAK}y") == [Text("x"), LineBreak(), Text("y")]

    def test_rule_needs_its_own_line(self) -> None:
        assert decode(f"x{HRULE}-") == [Text(f"x{HRULE}-")]

    def test_find_scope_stop_skips_nested_scopes(self) -> None:
        # Body starts right after the outer start mark.
        assert find_scope_stop(_STREAM, 2) == _STREAM.rindex(INDENT_STOP)

    def test_unclosed_scope_raises(self) -> None:
        with pytest.raises(ValueError):
            decode(f"{scope_header('> ', '> ')}text")

    def test_stop_before_start_raises(self) -> None:
        with pytest.raises(ValueError):
            decode(f"text{INDENT_STOP}")

    def test_scope_without_separators_raises(self) -> None:
        with pytest.raises(ValueError):
            decode(f"{INDENT_START}text{INDENT_STOP}")
