"""Intermediate node tree produced by the renderer and consumed by reflow.

The tree carries exactly what a marked stream carries (see
:mod:`pi.mdtext.marks`) but keeps indent scopes as real nesting, so the
reflow pass recurses over children instead of hunting for matching stop
marks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from pi.mdtext.marks import BREAK_MARKS, HRULE, INDENT_STOP, LINE_BREAK, scope_header


@dataclass(frozen=True)
class Text:
    """Inline text; may hold ANSI escapes and NBSP marks but never line breaks."""

    text: str


@dataclass(frozen=True)
class LineBreak:
    """A forced line break."""


@dataclass(frozen=True)
class Rule:
    """A horizontal rule, expanded to the full width during reflow."""

    fill: str = "-"


@dataclass
class Scope:
    """A nested indent region.

    ``prefix_first`` goes in front of the first line emitted for the region,
    ``prefix_continuation`` in front of every later line.  Both are appended to
    the prefixes of any enclosing scope.
    """

    prefix_first: str
    prefix_continuation: str
    children: list[Node] = field(default_factory=list)


Node = Union[Text, LineBreak, Rule, Scope]


# ---------------------------------------------------------------------------
# Fragment builder
# ---------------------------------------------------------------------------


class Fragment:
    """Ordered list of nodes under construction, with a stack of open scopes.

    Appends always go to the innermost open scope.  Block spacing decisions
    look at the trailing marks the fragment would have as a marked stream,
    so an open scope with no children reads like a trailing continuation
    separator and a closed scope like a trailing stop mark.  Scopes that
    close together count as a single stop mark: their content ends on one
    line, so only one line end follows it.
    """

    def __init__(self, nodes: list[Node] | None = None) -> None:
        self.nodes: list[Node] = list(nodes) if nodes else []
        self._open: list[Scope] = []

    def __bool__(self) -> bool:
        return bool(self.nodes)

    def __repr__(self) -> str:
        return f"Fragment({self.nodes!r})"

    @property
    def depth(self) -> int:
        """Number of scopes currently open."""
        return len(self._open)

    def _target(self) -> list[Node]:
        return self._open[-1].children if self._open else self.nodes

    # -- appending ----------------------------------------------------------

    def append(self, node: Node) -> None:
        target = self._target()
        if isinstance(node, Text):
            if not node.text:
                return
            if target and isinstance(target[-1], Rule):
                # A rule always ends its line.
                target.append(LineBreak())
            elif target and isinstance(target[-1], Text):
                target[-1] = Text(target[-1].text + node.text)
                return
        target.append(node)

    def extend(self, nodes: list[Node]) -> None:
        for node in nodes:
            self.append(node)

    def write(self, text: str) -> None:
        """Append *text*, turning embedded line-break marks into :class:`LineBreak` nodes."""
        for n, piece in enumerate(text.split(LINE_BREAK)):
            if n:
                self.append(LineBreak())
            if piece:
                self.append(Text(piece))

    def line_break(self) -> None:
        self.append(LineBreak())

    # -- scopes -------------------------------------------------------------

    def open_scope(self, prefix_first: str, prefix_continuation: str) -> Scope:
        scope = Scope(prefix_first, prefix_continuation)
        self._target().append(scope)
        self._open.append(scope)
        return scope

    def close_scope(self) -> None:
        if not self._open:
            raise IndexError("no open scope to close")
        self._open.pop()

    def close_all(self) -> None:
        self._open.clear()

    # -- block spacing ------------------------------------------------------

    def ensure_newline(self) -> None:
        """Add a line break unless the output is empty or already at a line start."""
        last = next(self._trailing_marks(), None)
        if last is not None and last not in BREAK_MARKS:
            self.line_break()

    def ensure_blank_line(self) -> None:
        """Make the output end in one blank line, unless it is empty."""
        marks = self._trailing_marks()
        last = next(marks, None)
        if last is None:
            return
        if last not in BREAK_MARKS:
            self.line_break()
            self.line_break()
            return
        second = next(marks, None)
        if second is None or second not in BREAK_MARKS:
            self.line_break()

    def _trailing_marks(self) -> Iterator[str]:
        """Yield the characters of the equivalent marked stream, last first."""
        levels = [self.nodes] + [scope.children for scope in self._open]
        for depth in range(len(levels) - 1, -1, -1):
            children = levels[depth]
            if depth < len(levels) - 1:
                # The open scope itself is the last child of its parent.
                children = children[:-1]
            yield from _reversed_marks(children)
            if depth > 0:
                scope = self._open[depth - 1]
                yield from reversed(scope_header(scope.prefix_first, scope.prefix_continuation))

    # -- finishing ----------------------------------------------------------

    def trimmed(self) -> list[Node]:
        """Return the top-level nodes without leading or trailing line breaks."""
        nodes = self.nodes
        start, end = 0, len(nodes)
        while start < end and isinstance(nodes[start], LineBreak):
            start += 1
        while end > start and isinstance(nodes[end - 1], LineBreak):
            end -= 1
        return nodes[start:end]


def _reversed_marks(nodes: list[Node], closing: bool = False) -> Iterator[str]:
    """Yield the marks of *nodes*, last first.

    With *closing* set the nodes end just before a stop mark, and a trailing
    scope shares that stop mark instead of adding its own.
    """
    for n, node in enumerate(reversed(nodes)):
        if isinstance(node, Text):
            yield from reversed(node.text)
        elif isinstance(node, LineBreak):
            yield LINE_BREAK
        elif isinstance(node, Rule):
            yield node.fill
            yield HRULE
        elif isinstance(node, Scope):
            if not (closing and n == 0):
                yield INDENT_STOP
            yield from _reversed_marks(node.children, closing=True)
            yield from reversed(scope_header(node.prefix_first, node.prefix_continuation))
