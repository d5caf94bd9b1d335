"""Interval relation classifier.

Compares two half-open intervals and returns one of the 13 Allen
relations, computed from the four pairwise orderings of their bounds.
The forest builder only needs seven cases, so ``collapse`` maps the
full relation set onto ``NestingRelation``.

Point intervals (``start == end``) reduce to ordinary ``<``, ``=``, ``>``
on their positions: ``before``, ``equal``, ``after``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, get_args

from markforest.markup.types import AllenRelation, NestingRelation

if TYPE_CHECKING:
    from markforest.markup.types import Range

ALLEN_RELATIONS: Final[tuple[AllenRelation, ...]] = get_args(AllenRelation)

NESTING_RELATIONS: Final[tuple[NestingRelation, ...]] = get_args(NestingRelation)

# Collapse table used by the forest builder. Changing any entry changes
# where ranges get split.
_COLLAPSE: Final[dict[AllenRelation, NestingRelation]] = {
    "before": "before",
    "meets": "before",
    "after": "after",
    "meets_inverse": "after",
    "starts": "during",
    "finishes": "during",
    "during": "during",
    "starts_inverse": "contains",
    "finishes_inverse": "contains",
    "during_inverse": "contains",
    "overlaps": "overlaps_left",
    "overlaps_inverse": "overlaps_right",
    "equal": "equal",
}


def _compare(x: int, y: int) -> int:
    return (x > y) - (x < y)


def classify_bounds(a_start: int, a_end: int, b_start: int, b_end: int) -> AllenRelation:
    """Classify interval ``a`` relative to interval ``b``.

    Args:
        a_start: Start of the first interval.
        a_end: End of the first interval.
        b_start: Start of the second interval.
        b_end: End of the second interval.

    Returns:
        The Allen relation of ``a`` with respect to ``b``.

    Examples:
        >>> classify_bounds(0, 2, 2, 4)
        'meets'
        >>> classify_bounds(1, 3, 0, 4)
        'during'
        >>> classify_bounds(5, 5, 5, 5)
        'equal'
    """
    start_start = _compare(a_start, b_start)
    start_end = _compare(a_start, b_end)
    end_start = _compare(a_end, b_start)
    end_end = _compare(a_end, b_end)

    if start_start == 0 and end_end == 0:
        return "equal"
    if end_start < 0:
        return "before"
    if start_end > 0:
        return "after"
    if end_start == 0:
        return "meets"
    if start_end == 0:
        return "meets_inverse"
    if start_start == 0:
        return "starts" if end_end < 0 else "starts_inverse"
    if end_end == 0:
        return "finishes" if start_start > 0 else "finishes_inverse"
    if start_start < 0:
        return "overlaps" if end_end < 0 else "during_inverse"
    return "during" if end_end < 0 else "overlaps_inverse"


def classify(a: Range[object], b: Range[object]) -> AllenRelation:
    """Classify range ``a`` relative to range ``b``; tags are ignored."""
    return classify_bounds(a.start, a.end, b.start, b.end)


def collapse(relation: AllenRelation) -> NestingRelation:
    """Collapse an Allen relation to the forest builder's seven cases."""
    return _COLLAPSE[relation]


def nesting_relation(a: Range[object], b: Range[object]) -> NestingRelation:
    """Return how ``a`` should be placed relative to an existing tree rooted at ``b``."""
    return _COLLAPSE[classify(a, b)]
