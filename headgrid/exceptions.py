"""headgrid exception hierarchy.

All headgrid-specific exceptions inherit from HeadGridException, enabling
catch-all handling while supporting specific error types.

The grid builders themselves never raise these; they are produced by
declarative parsing and by the opt-in tree validation.
"""

from __future__ import annotations

from typing import Any


class HeadGridException(Exception):
    """Base exception for all headgrid errors."""

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize headgrid exception.

        Parameters
        ----------
        message : str
            Human-readable error message.
        **context : Any
            Additional context (key, group, path, etc.).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format exception with context."""
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ColumnDefinitionError(HeadGridException):
    """Declarative column input could not be parsed.

    Raised by ``parse_columns`` when a mapping is neither a valid leaf
    nor a valid group definition.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        **context: Any,
    ) -> None:
        """Initialize column definition error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        errors : list of dict, optional
            The validation errors reported by pydantic.
        **context : Any
            Additional context.
        """
        super().__init__(message, **context)
        self.errors = errors or []


class ColumnTreeError(HeadGridException):
    """A column tree is structurally invalid.

    Raised by ``validate_columns`` (and by the builders when validation
    is enabled).
    """

    def __init__(self, message: str, path: str | None = None, **context: Any) -> None:
        """Initialize column tree error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        path : str, optional
            Slash-separated position of the offending node, e.g. ``"0/2"``.
        **context : Any
            Additional context.
        """
        super().__init__(message, path=path, **context)
        self.path = path


class EmptyGroupError(ColumnTreeError):
    """A column group has no children."""

    def __init__(
        self,
        message: str,
        group: str | None = None,
        path: str | None = None,
        **context: Any,
    ) -> None:
        """Initialize empty group error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        group : str, optional
            Display name of the empty group.
        path : str, optional
            Position of the group in the tree.
        **context : Any
            Additional context.
        """
        super().__init__(message, path=path, group=group, **context)
        self.group = group


class DuplicateKeyError(ColumnTreeError):
    """Two leaves share the same key."""

    def __init__(
        self,
        message: str,
        key: str,
        path: str | None = None,
        **context: Any,
    ) -> None:
        """Initialize duplicate key error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        key : str
            The repeated leaf key.
        path : str, optional
            Position of the second occurrence.
        **context : Any
            Additional context (e.g. ``first_path``).
        """
        super().__init__(message, path=path, key=key, **context)
        self.key = key


class CyclicColumnError(ColumnTreeError):
    """A column group contains itself."""

    def __init__(
        self,
        message: str,
        group: str | None = None,
        path: str | None = None,
        **context: Any,
    ) -> None:
        """Initialize cyclic column error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        group : str, optional
            Display name of the group that closes the cycle.
        path : str, optional
            Position where the cycle was detected.
        **context : Any
            Additional context.
        """
        super().__init__(message, path=path, group=group, **context)
        self.group = group
