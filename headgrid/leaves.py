"""Flatten a column tree into its data columns."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .columns import Column, ColumnLeaf
from .validation import prepare_columns


def _collect(columns: Sequence[Column]) -> list[ColumnLeaf]:
    leaves: list[ColumnLeaf] = []
    for column in columns:
        if column.type == "data":
            leaves.append(column)
        else:
            leaves.extend(_collect(column.columns))
    return leaves


def collect_leaves(
    columns: Iterable[Column | dict[str, Any]], *, validate: bool | None = None
) -> list[ColumnLeaf]:
    """Get the data columns in the order they are rendered.

    This is the in-order traversal of the leaf nodes of the column tree, and
    matches the left-to-right order of leaf cells in the bottom row of
    ``build_header_grid``.

    Parameters
    ----------
    columns : iterable of Column or dict
        The column structure grouped by columns.
    validate : bool or None
        Validate the tree first. ``None`` uses ``settings.grid.strict``.

    Returns
    -------
    list[ColumnLeaf]
        The leaf columns, left to right.
    """
    return _collect(prepare_columns(columns, validate))


def leaf_keys(
    columns: Iterable[Column | dict[str, Any]], *, validate: bool | None = None
) -> list[str]:
    """Get the data keys in the order of column access."""
    return [leaf.key for leaf in collect_leaves(columns, validate=validate)]
