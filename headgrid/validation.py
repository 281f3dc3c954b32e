"""Structural validation of column trees.

The grid builders do not validate their input: an empty group makes them
fail with ``IndexError`` and a cyclic tree never terminates. Validation is
opt-in, either per call (``validate=True``) or globally through
``HEADGRID_GRID__STRICT=true``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .columns import Column, parse_columns
from .config import get_settings
from .exceptions import CyclicColumnError, DuplicateKeyError, EmptyGroupError
from .log import debug


def _format_path(path: tuple[int, ...]) -> str:
    return "/".join(str(i) for i in path)


def validate_columns(columns: Sequence[Column]) -> None:
    """Check a column tree for empty groups, duplicate keys and cycles.

    The walk is iterative, so arbitrarily deep trees are fine.

    Parameters
    ----------
    columns : sequence of Column
        Top-level columns.

    Raises
    ------
    EmptyGroupError
        A group has no child columns.
    DuplicateKeyError
        Two leaves share a key.
    CyclicColumnError
        A group is its own ancestor.
    """
    seen_keys: dict[str, str] = {}
    # Each frame: (column, position path, ids of ancestor groups)
    stack: list[tuple[Column, tuple[int, ...], frozenset[int]]] = [
        (column, (i,), frozenset()) for i, column in reversed(list(enumerate(columns)))
    ]

    while stack:
        column, path, ancestors = stack.pop()
        location = _format_path(path)

        if column.type == "data":
            if column.key in seen_keys:
                raise DuplicateKeyError(
                    f"Duplicate column key '{column.key}'",
                    key=column.key,
                    path=location,
                    first_path=seen_keys[column.key],
                )
            seen_keys[column.key] = location
            continue

        if id(column) in ancestors:
            raise CyclicColumnError(
                f"Column group '{column.name}' contains itself",
                group=column.name,
                path=location,
            )
        if not column.columns:
            raise EmptyGroupError(
                f"Column group '{column.name}' has no columns",
                group=column.name,
                path=location,
            )

        inner = ancestors | {id(column)}
        stack.extend(
            (child, (*path, i), inner) for i, child in reversed(list(enumerate(column.columns)))
        )

    debug(f"Validated column tree with {len(seen_keys)} leaves")


def prepare_columns(
    columns: Iterable[Column | dict[str, Any]], validate: bool | None = None
) -> list[Column]:
    """Parse declarative columns and validate them when requested.

    Parameters
    ----------
    columns : iterable of Column or dict
        Top-level columns.
    validate : bool or None
        Validate the tree first. ``None`` uses ``settings.grid.strict``.

    Returns
    -------
    list[Column]
        The parsed top-level columns.
    """
    parsed = parse_columns(columns)
    if validate is None:
        validate = get_settings().grid.strict
    if validate:
        validate_columns(parsed)
    return parsed
