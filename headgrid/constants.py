"""Shared constants for header grid construction."""

# Blank header cells carry a non-breaking space so renderers never collapse them.
NBSP = "\u00a0"
