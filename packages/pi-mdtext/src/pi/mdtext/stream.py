"""Conversion between node trees and flat marked streams."""

from __future__ import annotations

from pi.mdtext.marks import (
    HRULE,
    INDENT_CONTINUATION,
    INDENT_FIRST,
    INDENT_START,
    INDENT_STOP,
    LINE_BREAK,
    scope_header,
)
from pi.mdtext.nodes import LineBreak, Node, Rule, Scope, Text


def encode(nodes: list[Node]) -> str:
    """Serialize a node tree into a marked stream."""
    parts: list[str] = []
    _encode_into(nodes, parts)
    return "".join(parts)


def _encode_into(nodes: list[Node], parts: list[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, LineBreak):
            parts.append(LINE_BREAK)
        elif isinstance(node, Rule):
            parts.append(HRULE + node.fill)
        elif isinstance(node, Scope):
            parts.append(scope_header(node.prefix_first, node.prefix_continuation))
            _encode_into(node.children, parts)
            parts.append(INDENT_STOP)


def decode(stream: str) -> list[Node]:
    """Parse a marked stream into a node tree.

    Raises ``ValueError`` when indent scopes are unbalanced or a scope lacks
    its prefix separators.  A stream built by the renderer never does either.
    """
    nodes: list[Node] = []
    pos = 0
    while True:
        start = stream.find(INDENT_START, pos)
        if start == -1:
            _decode_flat(stream[pos:], nodes)
            return nodes
        _decode_flat(stream[pos:start], nodes)
        stop = find_scope_stop(stream, start + 1)
        inner = stream[start + 1 : stop]
        first_end = inner.find(INDENT_FIRST)
        continuation_end = inner.find(INDENT_CONTINUATION, first_end + 1)
        if first_end == -1 or continuation_end == -1:
            raise ValueError(f"indent scope at offset {start} has no prefix separators")
        nodes.append(
            Scope(
                prefix_first=inner[:first_end],
                prefix_continuation=inner[first_end + 1 : continuation_end],
                children=decode(inner[continuation_end + 1 :]),
            )
        )
        pos = stop + 1


def find_scope_stop(stream: str, pos: int) -> int:
    """Return the index of the stop mark closing a scope whose body starts at *pos*.

    Every further start raises the nesting count and every stop lowers it;
    the stop that brings the count to zero is the match.
    """
    nested = 1
    for i in range(pos, len(stream)):
        ch = stream[i]
        if ch == INDENT_START:
            nested += 1
        elif ch == INDENT_STOP:
            nested -= 1
            if nested == 0:
                return i
    raise ValueError(f"unbalanced indent scope opened at offset {pos - 1}")


def _decode_flat(segment: str, nodes: list[Node]) -> None:
    if INDENT_STOP in segment:
        raise ValueError("indent scope closed before it was opened")
    for n, line in enumerate(segment.split(LINE_BREAK)):
        if n:
            nodes.append(LineBreak())
        if len(line) == 2 and line[0] == HRULE:
            nodes.append(Rule(line[1]))
        elif line:
            nodes.append(Text(line))
