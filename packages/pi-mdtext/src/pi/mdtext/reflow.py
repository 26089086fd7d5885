"""Reflow: resolve nested indent scopes and word-wrap the result."""

from __future__ import annotations

from pi.mdtext.marks import HRULE, LINE_BREAK
from pi.mdtext.nodes import LineBreak, Node, Rule, Scope, Text
from pi.mdtext.stream import decode
from pi.mdtext.wrap import wrap


def reflow(nodes: list[Node], prefix_first: str, prefix_continuation: str, width: int) -> str:
    """Wrap *nodes* to *width*, applying the prefixes of every enclosing scope.

    Runs of non-scope nodes are wrapped with the current prefixes.  A scope
    is reflowed recursively with the current prefixes extended by its own.
    Once anything has been written, the first-line prefix collapses to the
    continuation prefix, so only the very first line uses it.

    The result still carries NBSP and line-break marks; see
    :func:`pi.mdtext.marks.resolve`.
    """
    out: list[str] = []
    run: list[str] = []

    def flush() -> None:
        nonlocal prefix_first
        if run:
            out.append(wrap("".join(run), width, prefix_first, prefix_continuation))
            run.clear()
        if any(out):
            prefix_first = prefix_continuation

    for node in nodes:
        if isinstance(node, Scope):
            flush()
            out.append(
                reflow(
                    node.children,
                    prefix_first + node.prefix_first,
                    prefix_continuation + node.prefix_continuation,
                    width,
                )
            )
            if any(out):
                prefix_first = prefix_continuation
        elif isinstance(node, Text):
            run.append(node.text)
        elif isinstance(node, LineBreak):
            run.append(LINE_BREAK)
        elif isinstance(node, Rule):
            run.append(HRULE + node.fill)
    flush()
    return "".join(out)


def reflow_stream(stream: str, prefix_first: str, prefix_continuation: str, width: int) -> str:
    """Reflow a flat marked stream; see :func:`reflow`."""
    return reflow(decode(stream), prefix_first, prefix_continuation, width)


def normalize_newlines(nodes: list[Node]) -> list[Node]:
    """Fold raw newlines left in text nodes into spaces, recursively.

    Soft line breaks from the source arrive as ``"\\n"``; only line-break
    marks survive as real breaks.
    """
    result: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and "\n" in node.text:
            result.append(Text(node.text.replace(" \n", " ").replace("\n", " ")))
        elif isinstance(node, Scope):
            result.append(
                Scope(node.prefix_first, node.prefix_continuation, normalize_newlines(node.children))
            )
        else:
            result.append(node)
    return result
