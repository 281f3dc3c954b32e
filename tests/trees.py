"""Shared column trees and reference helpers for the test suite.

The reference helpers (``count_leaves``, ``max_depth``, ``manual_leaf_keys``)
are written independently of the library so properties can be checked
against them.
"""

from __future__ import annotations

import random

from headgrid.columns import Column, ColumnGroup, ColumnLeaf


def leaf(key: str, name: str | None = None) -> ColumnLeaf:
    """Leaf whose display name defaults to the upper-cased key."""
    return ColumnLeaf(key=key, name=name if name is not None else key.upper())


def group(name: str, *columns: Column) -> ColumnGroup:
    return ColumnGroup(name=name, columns=list(columns))


# Scenario A: two plain leaves
FLAT = [leaf("a"), leaf("b")]

# Scenario B: group of two leaves next to a plain leaf
GROUP_AND_LEAF = [group("G", leaf("a"), leaf("b")), leaf("c")]

# Scenario C: a shallow leaf next to a nested group
NESTED = [group("G1", leaf("a"), group("G2", leaf("b")))]

# Mixed depths on both sides of a deep group
UNEVEN = [
    leaf("id"),
    group(
        "Person",
        group("Name", leaf("first"), leaf("last")),
        leaf("age"),
    ),
    group("Contact", leaf("email")),
    leaf("notes"),
]

# A single chain five groups deep
DEEP_CHAIN = [group("L1", group("L2", group("L3", group("L4", group("L5", leaf("x"))))))]

NAMED_TREES: dict[str, list[Column]] = {
    "flat": FLAT,
    "group_and_leaf": GROUP_AND_LEAF,
    "nested": NESTED,
    "uneven": UNEVEN,
    "deep_chain": DEEP_CHAIN,
}


def random_tree(seed: int, max_depth: int = 4, max_children: int = 4) -> list[Column]:
    """Generate a well-formed column tree with unique keys."""
    rng = random.Random(seed)
    counter = iter(range(10_000))

    def make(depth: int) -> Column:
        if depth >= max_depth or rng.random() < 0.45:
            key = f"k{next(counter)}"
            return ColumnLeaf(key=key, name=key.upper())
        children = [make(depth + 1) for _ in range(rng.randint(1, max_children))]
        return ColumnGroup(name=f"g{next(counter)}", columns=children)

    return [make(1) for _ in range(rng.randint(1, max_children))]


RANDOM_TREES: dict[str, list[Column]] = {f"random_{seed}": random_tree(seed) for seed in range(25)}

ALL_TREES: dict[str, list[Column]] = {**NAMED_TREES, **RANDOM_TREES}


def count_leaves(columns: list[Column]) -> int:
    return sum(1 if c.type == "data" else count_leaves(c.columns) for c in columns)


def max_depth(columns: list[Column]) -> int:
    """Number of header rows: a leaf alone is depth 1, each group adds one."""
    if not columns:
        return 0
    return max(1 if c.type == "data" else 1 + max_depth(c.columns) for c in columns)


def manual_leaf_keys(columns: list[Column]) -> list[str]:
    keys: list[str] = []
    for c in columns:
        if c.type == "data":
            keys.append(c.key)
        else:
            keys.extend(manual_leaf_keys(c.columns))
    return keys
