"""Table layout: fixed-width bordered grids.

Cells arrive as sentinel-delimited sub-streams (each cell followed by a
cell mark, each row by a row mark).  Column widths are unified across the
header and body rows, then every row is padded into an ASCII grid::

    +---+----+
    | A | BB |
    +---+----+
    | 1 | 22 |
    +---+----+
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pi.mdtext.marks import TABLE_CELL, TABLE_ROW
from pi.mdtext.width import visible_width

# A header row starting with this cell is left out of the rendered header.
OMIT_HEADER = "omit"


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class TableAlignment:
    """How cell text is placed inside its padded field.

    Per-column entries in ``columns`` win; otherwise the alignment written
    in the table markup is used when ``honor_markup`` is set; otherwise
    ``default``.
    """

    default: Align = Align.LEFT
    columns: tuple[Align, ...] = ()
    honor_markup: bool = False

    def resolve(self, column: int, markup: Align | None = None) -> Align:
        if column < len(self.columns):
            return self.columns[column]
        if self.honor_markup and markup is not None:
            return markup
        return self.default


# ---------------------------------------------------------------------------
# Sub-stream splitting
# ---------------------------------------------------------------------------


def split_grid(stream: str) -> list[list[str]]:
    """Split a row/cell-marked sub-stream into rows of cells.

    Rows with no cells (blank separators) are skipped.
    """
    rows: list[list[str]] = []
    if not stream:
        return rows
    if stream.endswith(TABLE_ROW):
        stream = stream[:-1]
    for row in stream.split(TABLE_ROW):
        if not row:
            continue
        if row.endswith(TABLE_CELL):
            row = row[:-1]
        rows.append(row.split(TABLE_CELL))
    return rows


def header_rows(stream: str) -> list[list[str]]:
    """Header rows of a table, without any row marked as omitted."""
    return [row for row in split_grid(stream) if row and row[0] != OMIT_HEADER]


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def column_widths(rows: list[list[str]]) -> list[int]:
    """Widest visible cell of every column across *rows*."""
    widths: list[int] = []
    for row in rows:
        for col, cell in enumerate(row):
            w = visible_width(cell)
            if col == len(widths):
                widths.append(w)
            elif w > widths[col]:
                widths[col] = w
    return widths


def border_line(widths: list[int]) -> str:
    return "+" + "".join("-" * (w + 2) + "+" for w in widths)


def _pad(cell: str, width: int, align: Align) -> str:
    padding = max(0, width - visible_width(cell))
    if align is Align.RIGHT:
        return " " * padding + cell
    if align is Align.CENTER:
        left = padding // 2
        return " " * left + cell + " " * (padding - left)
    return cell + " " * padding


def row_line(cells: list[str], widths: list[int], aligns: list[Align]) -> str:
    parts = ["|"]
    for col, width in enumerate(widths):
        cell = cells[col] if col < len(cells) else ""
        parts.append(f" {_pad(cell, width, aligns[col])} |")
    return "".join(parts)


def layout_table(
    header: list[list[str]],
    body: list[list[str]],
    alignment: TableAlignment | None = None,
    markup_aligns: list[Align | None] | None = None,
) -> list[str]:
    """Render header and body rows as grid lines (no trailing newlines).

    Returns an empty list when there are no rows at all.
    """
    if not header and not body:
        return []
    alignment = alignment or TableAlignment()
    markup_aligns = markup_aligns or []
    widths = column_widths(header + body)
    aligns = [
        alignment.resolve(col, markup_aligns[col] if col < len(markup_aligns) else None)
        for col in range(len(widths))
    ]

    border = border_line(widths)
    lines = [border]
    if header:
        lines.extend(row_line(row, widths, aligns) for row in header)
        lines.append(border)
    lines.extend(row_line(row, widths, aligns) for row in body)
    lines.append(border)
    return lines
