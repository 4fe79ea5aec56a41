"""Nested report tables flattened into rows with row-span metadata.

A report is a tree: report -> policy results -> failure details. Each
level contributes a fixed number of columns. A node's cells are emitted
once, on the first physical row of its subtree, spanning every leaf row
below it. A node without children still occupies one row; the columns of
the missing deeper levels are filled by a single empty placeholder cell.

Example (report with two policy results having 3 and 0 details)::

    | r1 (rowspan 4) | p1 (rowspan 3) | d1 |
    |                |                | d2 |
    |                |                | d3 |
    |                | p2             | -- placeholder -- |
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class Cell:
    """One table cell.

    ``tone`` is an optional highlight (``"good"``, ``"warn"``, ``"bad"``).
    """

    text: str = ""
    rowspan: int = 1
    colspan: int = 1
    title: str = ""
    href: str = ""
    tone: str = ""
    numeric: bool = False


@dataclass(frozen=True, slots=True)
class DisplayRow:
    cells: tuple[Cell, ...]


@dataclass(frozen=True, slots=True)
class RowGroup:
    """One node of a nested report: its own cells and its child nodes."""

    cells: tuple[Cell, ...]
    children: tuple["RowGroup", ...] = field(default=())

    @property
    def leaf_count(self) -> int:
        """Physical rows this node occupies; never zero."""
        if not self.children:
            return 1
        return sum(child.leaf_count for child in self.children)


def render_groups(groups: Sequence[RowGroup], widths: Sequence[int]) -> list[DisplayRow]:
    """Flatten nested groups into display rows.

    *widths* gives the column count of each level, top level first. Raises
    ``ValueError`` when a group's cell count does not match its level, or
    when groups nest deeper than *widths*.
    """
    rows: list[DisplayRow] = []
    for group in groups:
        rows.extend(DisplayRow(tuple(cells)) for cells in _render(group, widths, 0))
    return rows


def _render(group: RowGroup, widths: Sequence[int], depth: int) -> list[list[Cell]]:
    if depth >= len(widths):
        msg = f"report nests deeper than {len(widths)} levels"
        raise ValueError(msg)
    if len(group.cells) != widths[depth]:
        msg = f"level {depth} expects {widths[depth]} cells, got {len(group.cells)}"
        raise ValueError(msg)

    span = group.leaf_count
    own = [replace(cell, rowspan=span) if span != 1 else cell for cell in group.cells]

    if group.children:
        rows: list[list[Cell]] = []
        for child in group.children:
            rows.extend(_render(child, widths, depth + 1))
    else:
        remaining = sum(widths[depth + 1 :])
        rows = [[Cell(colspan=remaining)] if remaining else []]

    rows[0] = own + rows[0]
    return rows


def row_width(row: DisplayRow) -> int:
    return sum(cell.colspan for cell in row.cells)


def expand_spans(rows: Sequence[DisplayRow]) -> list[list[Cell]]:
    """Expand row and column spans into a grid of cell references.

    A spanning cell appears in every grid position it covers. Raises
    ``ValueError`` if a row span runs past the last row.
    """
    grid: list[list[Cell | None]] = [[] for _ in rows]

    def place(r: int, c: int, cell: Cell) -> None:
        line = grid[r]
        while len(line) <= c:
            line.append(None)
        line[c] = cell

    for r, row in enumerate(rows):
        col = 0
        for cell in row.cells:
            while col < len(grid[r]) and grid[r][col] is not None:
                col += 1
            if r + cell.rowspan > len(rows):
                msg = f"row {r}: rowspan {cell.rowspan} runs past the table"
                raise ValueError(msg)
            for dr in range(cell.rowspan):
                for dc in range(cell.colspan):
                    place(r + dr, col + dc, cell)
            col += cell.colspan

    return [[cell for cell in line if cell is not None] for line in grid]


def is_rectangular(rows: Sequence[DisplayRow]) -> bool:
    """Whether every physical row has the same width once spans expand."""
    try:
        grid = expand_spans(rows)
    except ValueError:
        return False
    return len({len(line) for line in grid}) <= 1
