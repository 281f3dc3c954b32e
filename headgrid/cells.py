"""Header cell models.

A header grid is a list of rows, each a list of cells. Every cell carries a
``colspan``; a renderer emits one ``<th colspan=...>`` (or equivalent) per
cell and nothing for the positions a wide cell covers.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import NBSP


class CellModel(BaseModel):
    """Base model for header cells."""

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return self.model_dump()


class LeafCell(CellModel):
    """Header of a data column."""

    type: Literal["leaf"] = "leaf"
    colspan: Literal[1] = 1
    key: str
    name: str


class GroupCell(CellModel):
    """Header of a column group, spanning all of its descendant leaves."""

    type: Literal["group"] = "group"
    colspan: int = Field(ge=1)
    name: str


class BlankCell(CellModel):
    """Spacer above a column whose header chain is shorter than the grid."""

    type: Literal["blank"] = "blank"
    colspan: Literal[1] = 1
    name: str = NBSP


HeaderCell = Annotated[
    Union[LeafCell, GroupCell, BlankCell],
    Field(discriminator="type"),
]

HeaderRow = list[HeaderCell]
HeaderGrid = list[HeaderRow]
