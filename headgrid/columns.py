"""Column tree models.

A column tree is a list of columns, each either a leaf (``type="data"``)
that renders one data field, or a group (``type="group"``) that labels an
ordered list of child columns:

    from headgrid.columns import ColumnGroup, ColumnLeaf, parse_columns

    columns = [
        ColumnGroup(name="Person", columns=[
            ColumnLeaf(key="first", name="First"),
            ColumnLeaf(key="last", name="Last"),
        ]),
        ColumnLeaf(key="age", name="Age"),
    ]

    # Same tree from declarative data; AG Grid spellings are accepted too
    columns = parse_columns([
        {"headerName": "Person", "children": [
            {"field": "first", "headerName": "First"},
            {"field": "last", "headerName": "Last"},
        ]},
        {"key": "age", "name": "Age"},
    ])
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from .exceptions import ColumnDefinitionError
from .log import debug


class ColumnModel(BaseModel):
    """Base model for column tree nodes."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",  # Keep renderer hints such as width or align
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict with canonical keys, excluding None values."""
        return self.model_dump(exclude_none=True)


class ColumnLeaf(ColumnModel):
    """A data-bearing column.

    ``key`` names the data field rendered in this column and ``name`` is the
    header label. ``name`` falls back to ``key`` when omitted.
    """

    type: Literal["data"] = "data"
    key: str = Field(validation_alias=AliasChoices("key", "field"))
    name: str = Field(validation_alias=AliasChoices("name", "headerName", "header_name"))

    @model_validator(mode="before")
    @classmethod
    def default_name_to_key(cls, data: Any) -> Any:
        """Use the key as display name when no name is given."""
        if not isinstance(data, dict):
            return data
        if any(alias in data for alias in ("name", "headerName", "header_name")):
            return data
        key = data.get("key", data.get("field"))
        if key is None:
            return data
        return {**data, "name": key}


class ColumnGroup(ColumnModel):
    """A labelled group of child columns.

    ``columns`` must be non-empty for the tree to be well formed. This is
    not enforced here; see ``headgrid.validation``.
    """

    type: Literal["group"] = "group"
    name: str = Field(validation_alias=AliasChoices("name", "headerName", "header_name"))
    columns: list[Column] = Field(validation_alias=AliasChoices("columns", "children"))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, recursively converting child columns."""
        result = self.model_dump(exclude_none=True, exclude={"columns"})
        result["columns"] = [c.to_dict() for c in self.columns]
        return result


def _column_kind(value: Any) -> str | None:
    """Return the union tag for a column given as a model or a mapping."""
    if isinstance(value, dict):
        kind = value.get("type")
        if kind is not None:
            return kind
        # AG Grid style definitions carry no type; groups have children
        if "columns" in value or "children" in value:
            return "group"
        return "data"
    return getattr(value, "type", None)


Column = Annotated[
    Union[
        Annotated[ColumnLeaf, Tag("data")],
        Annotated[ColumnGroup, Tag("group")],
    ],
    Discriminator(_column_kind),
]

ColumnGroup.model_rebuild()

_COLUMNS_ADAPTER: TypeAdapter[list[Column]] = TypeAdapter(list[Column])


def parse_columns(data: Iterable[Column | dict[str, Any]]) -> list[Column]:
    """Build a column tree from declarative data.

    Column model instances are passed through unchanged; mappings are
    validated into ``ColumnLeaf`` / ``ColumnGroup``.

    Parameters
    ----------
    data : iterable of Column or dict
        Top-level columns.

    Returns
    -------
    list[Column]
        The parsed top-level columns, in input order.

    Raises
    ------
    ColumnDefinitionError
        If any entry is not a valid leaf or group definition.
    """
    items = list(data)
    try:
        columns = _COLUMNS_ADAPTER.validate_python(items)
    except ValidationError as e:
        raise ColumnDefinitionError(
            f"Invalid column definition: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
        ) from e
    debug(f"Parsed {len(columns)} top-level columns")
    return columns
