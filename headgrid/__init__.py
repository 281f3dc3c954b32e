"""headgrid - Grouped table headers from declarative column trees.

This package turns a tree of column groups and data columns into the flat
list of data columns and the multi-row header grid used to render a table
head with grouped columns.
"""

from .cells import BlankCell, GroupCell, HeaderCell, HeaderGrid, HeaderRow, LeafCell
from .columns import Column, ColumnGroup, ColumnLeaf, parse_columns
from .config import GridSettings, HeadGridSettings, LogSettings, get_settings
from .constants import NBSP
from .exceptions import (
    ColumnDefinitionError,
    ColumnTreeError,
    CyclicColumnError,
    DuplicateKeyError,
    EmptyGroupError,
    HeadGridException,
)
from .header_rows import build_header_grid, grid_span, tree_height
from .leaves import collect_leaves, leaf_keys
from .validation import validate_columns


__version__ = "1.0.0"

__all__ = [
    "NBSP",
    "BlankCell",
    "Column",
    "ColumnDefinitionError",
    "ColumnGroup",
    "ColumnLeaf",
    "ColumnTreeError",
    "CyclicColumnError",
    "DuplicateKeyError",
    "EmptyGroupError",
    "GridSettings",
    "GroupCell",
    "HeadGridException",
    "HeadGridSettings",
    "HeaderCell",
    "HeaderGrid",
    "HeaderRow",
    "LeafCell",
    "LogSettings",
    "__version__",
    "build_header_grid",
    "collect_leaves",
    "get_settings",
    "grid_span",
    "leaf_keys",
    "parse_columns",
    "tree_height",
    "validate_columns",
]
