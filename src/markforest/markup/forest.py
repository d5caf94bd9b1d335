"""Forest builder: turn crossing ranges into properly nested trees.

Input ranges make no nesting promises; different tags may cross each
other freely. ``build_forest`` inserts them one at a time into an ordered
forest, splitting a range into two sibling fragments whenever it crosses
the boundary of a tree already placed. Siblings stay disjoint and sorted,
and children always lie inside their parent.

Insertion order affects the exact shape when several tags overlap, but
flattening the forest and re-inserting the ranges into an empty
``FormattedText`` always reproduces the original coverage.

Nested insertions run on an explicit stack of pending steps, so nesting
depth is not limited by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Sequence

from markforest.markup.relations import nesting_relation
from markforest.markup.types import Range, T, Tree

logger = logging.getLogger(__name__)

Level = tuple[Tree[T], ...]
# A pending insertion: the tree to place and the sibling level to place it in.
_Request = tuple[Tree[T], Level[T]]


def _leaf(r: Range[T]) -> Tree[T]:
    return Tree(r, ())


def _insert_steps(
    tree: Tree[T], forest: Level[T]
) -> Generator[_Request[T], Level[T], Level[T]]:
    """Scan one sibling level, yielding nested insertions to the driver.

    Each ``yield`` asks ``insert_tree`` to insert a tree into another level
    and resumes with the resulting level.
    """
    prefix: list[Tree[T]] = []
    index = 0
    while index < len(forest):
        head = forest[index]
        rest = forest[index + 1 :]
        relation = nesting_relation(tree.range, head.range)

        if relation == "after":
            prefix.append(head)
            index += 1
            continue

        if relation == "before":
            return (*prefix, tree, *forest[index:])

        if relation == "during":
            children = yield tree, head.children
            return (*prefix, Tree(head.range, children), *rest)

        if relation == "equal":
            children = yield head, tree.children
            return (*prefix, Tree(tree.range, children), *rest)

        if relation == "contains":
            children = yield head, tree.children
            tree = Tree(tree.range, children)
            index += 1
            continue

        new = tree.range
        if relation == "overlaps_left":
            outside = new.with_bounds(new.start, head.range.start)
            inside = new.with_bounds(head.range.start, new.end)
            logger.debug(f"Splitting {new} at {head.range.start} (crosses start of {head.range})")
            inner = yield _leaf(inside), head.children
            result = (*prefix, _leaf(outside), Tree(head.range, inner), *rest)
        else:
            inside = new.with_bounds(new.start, head.range.end)
            outside = new.with_bounds(head.range.end, new.end)
            logger.debug(f"Splitting {new} at {head.range.end} (crosses end of {head.range})")
            inner = yield _leaf(inside), head.children
            tail = yield _leaf(outside), rest
            result = (*prefix, Tree(head.range, inner), *tail)

        # Children of the split tree go back into the whole level
        for child in tree.children:
            result = yield child, result
        return result

    return (*prefix, tree)


def insert_tree(tree: Tree[T], forest: Sequence[Tree[T]]) -> tuple[Tree[T], ...]:
    """Insert ``tree`` into an ordered forest, splitting where needed.

    Siblings are scanned left to right and the new root is compared with
    the first sibling it does not lie entirely after:

    - ``equal`` / ``contains``: the new root adopts that sibling. With
      ``contains`` it may extend further right, so the scan continues with
      the enlarged tree over the remaining siblings.
    - ``during``: the tree is inserted into the sibling's children.
    - ``before``: the tree is placed in front of the sibling.
    - ``overlaps_left`` / ``overlaps_right``: the root is split at the
      sibling's boundary. The outside fragment becomes a bare sibling, the
      inside fragment goes into the sibling's children, and the original
      children of the split tree are re-inserted into the whole forest.

    Args:
        tree: Tree to insert (usually a bare range).
        forest: Ordered, pairwise disjoint sibling trees.

    Returns:
        New forest; the input is not modified.
    """
    pending = [_insert_steps(tree, tuple(forest))]
    level: Level[T] | None = None
    while True:
        try:
            request = pending[-1].send(level)
        except StopIteration as done:
            pending.pop()
            level = done.value
            if not pending:
                return level
            continue
        pending.append(_insert_steps(*request))
        level = None


def insert(new_range: Range[T], forest: Sequence[Tree[T]]) -> tuple[Tree[T], ...]:
    """Insert a single range into ``forest`` as a bare tree."""
    return insert_tree(_leaf(new_range), forest)


def build_forest(ranges: Iterable[Range[T]]) -> tuple[Tree[T], ...]:
    """Build a nested forest from an unordered list of ranges.

    Ranges are inserted in the order given. Zero-length ranges carry no
    text and are skipped.

    Examples:
        >>> forest = build_forest([Range("b", 0, 4), Range("i", 2, 6)])
        >>> [t.range for t in forest]
        [Range(tag='b', start=0, end=4), Range(tag='i', start=4, end=6)]
    """
    forest: tuple[Tree[T], ...] = ()
    for r in ranges:
        if r.start >= r.end:
            logger.debug(f"Skipping empty range {r}")
            continue
        forest = insert(r, forest)
    return forest


def flatten_forest(forest: Iterable[Tree[T]]) -> list[Range[T]]:
    """Return every range in the forest in pre-order (parents first)."""
    flat: list[Range[T]] = []
    stack: list[Tree[T]] = list(reversed(tuple(forest)))
    while stack:
        tree = stack.pop()
        flat.append(tree.range)
        stack.extend(reversed(tree.children))
    return flat
