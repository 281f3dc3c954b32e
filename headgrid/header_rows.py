"""Transform a column tree into the rows of a table head.

Each top-level column contributes a stack of header rows whose depth
depends on how deeply its leaves are nested:

    columns:  {...}         {...}    {...}
    rows:     [[..] [..]]   [[..]]   [[..] [..] [..]]

The stacks are laid side by side and bottom-aligned, so every leaf header
sits on the last row and shallower stacks are padded with blank cells on
top. A group header spans exactly the leaves beneath it.

Example (group ``G`` over ``a``/``b`` next to leaf ``c``)::

    | G           | (blank) |
    | A    | B    | C       |
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .cells import BlankCell, GroupCell, HeaderCell, HeaderGrid, LeafCell
from .columns import Column
from .log import debug
from .utils.math import total
from .validation import prepare_columns


def grid_span(row: Sequence[HeaderCell]) -> int:
    """Return the number of grid columns covered by a header row."""
    return int(total(*(cell.colspan for cell in row)))


def _column_rows(column: Column) -> HeaderGrid:
    """Get the rows representing a single column."""
    if column.type == "data":
        return [[LeafCell(key=column.key, name=column.name)]]

    rows = _build(column.columns)
    # The group spans the row directly below it
    group = GroupCell(name=column.name, colspan=grid_span(rows[0]))
    return [[group], *rows]


def _build(columns: Sequence[Column]) -> HeaderGrid:
    column_rows = [_column_rows(column) for column in columns]

    height = max((len(rows) for rows in column_rows), default=0)
    width = grid_span([cell for rows in column_rows for cell in rows[0]])

    # Working buffer; None marks a position merged into a wider cell to its left
    buffer: list[list[HeaderCell | None]] = [
        [BlankCell() for _ in range(width)] for _ in range(height)
    ]

    column_offset = 0
    for rows in column_rows:
        blank_rows = height - len(rows)
        for row_idx, row in enumerate(rows, start=blank_rows):
            position = column_offset
            for cell in row:
                buffer[row_idx][position] = cell
                for merged in range(1, cell.colspan):
                    buffer[row_idx][position + merged] = None
                position += cell.colspan
        column_offset += grid_span(rows[0])

    return [[cell for cell in row if cell is not None] for row in buffer]


def build_header_grid(
    columns: Iterable[Column | dict[str, Any]], *, validate: bool | None = None
) -> HeaderGrid:
    """Transform the column structure into rows in the table head.

    Parameters
    ----------
    columns : iterable of Column or dict
        The column structure grouped by columns.
    validate : bool or None
        Validate the tree first. ``None`` uses ``settings.grid.strict``.

    Returns
    -------
    HeaderGrid
        Header rows from top to bottom. Every row spans the number of leaf
        columns and the row count equals the depth of the tree.
    """
    grid = _build(prepare_columns(columns, validate))
    width = grid_span(grid[-1]) if grid else 0
    debug(f"Built header grid with {len(grid)} rows spanning {width} columns")
    return grid


def tree_height(columns: Iterable[Column | dict[str, Any]]) -> int:
    """Return the number of header rows a column tree needs.

    Computed iteratively; a tree of only leaves has height 1 and an empty
    list has height 0.
    """
    height = 0
    stack: list[tuple[Column, int]] = [(column, 1) for column in prepare_columns(columns)]
    while stack:
        column, depth = stack.pop()
        height = max(height, depth)
        if column.type == "group":
            stack.extend((child, depth + 1) for child in column.columns)
    return height
