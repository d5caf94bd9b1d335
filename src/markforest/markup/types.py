"""Shared type definitions for the markup modules.

This module contains the dataclasses and type aliases used across
the range set, relation classifier, forest builder, and materializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

T = TypeVar("T")
"""Opaque tag type supplied by the caller (only compared for equality)."""

U = TypeVar("U")
"""Output type produced by materialization callbacks."""

AllenRelation = Literal[
    "before",
    "after",
    "meets",
    "meets_inverse",
    "overlaps",
    "overlaps_inverse",
    "during",
    "during_inverse",
    "starts",
    "starts_inverse",
    "finishes",
    "finishes_inverse",
    "equal",
]
"""The 13 mutually exclusive Allen relations between two intervals."""

NestingRelation = Literal[
    "before",
    "after",
    "during",
    "contains",
    "overlaps_left",
    "overlaps_right",
    "equal",
]
"""Allen relations collapsed to the cases the forest builder distinguishes."""


@dataclass(frozen=True)
class Range(Generic[T]):
    """A tagged half-open interval ``[start, end)`` over character positions.

    Attributes:
        tag: Caller-defined markup value, compared only for equality.
        start: First covered character position.
        end: Position one past the last covered character.
    """

    tag: T
    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def with_bounds(self, start: int, end: int) -> Range[T]:
        """Return a range with the same tag and new bounds."""
        return Range(self.tag, start, end)

    def shifted(self, offset: int) -> Range[T]:
        return Range(self.tag, self.start + offset, self.end + offset)


@dataclass(frozen=True)
class Tree(Generic[T]):
    """A range together with the ranges nested inside it.

    Children are ordered left to right, pairwise disjoint, and each lies
    within ``range``.
    """

    range: Range[T]
    children: tuple[Tree[T], ...] = ()


Forest = tuple[Tree[T], ...]
"""Ordered, pairwise disjoint sibling trees."""


@dataclass(frozen=True)
class Leaf:
    """Untagged text in a materialized node tree."""

    text: str


@dataclass(frozen=True)
class Node(Generic[T]):
    """Tagged subtree in a materialized node tree."""

    tag: T
    children: tuple[Leaf | Node[T], ...] = field(default_factory=tuple)
