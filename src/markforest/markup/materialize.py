"""Materialize a nested forest into caller-defined output nodes.

Each tree's span is cut into bites with the slicing parser: a leaf bite
for any untagged gap before each child, one bite covering the child's
already-built output, and a trailing leaf for whatever is left. Trees
are built bottom-up from a post-order work list, so deep nesting does
not recurse.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import partial

from markforest.markup.forest import build_forest
from markforest.markup.formatted_text import FormattedText
from markforest.markup.slicing import Bite, slice_parse
from markforest.markup.types import Leaf, Node, Range, T, Tree, U

LeafFn = Callable[[str], U]
NodeFn = Callable[[T, list[U]], U]


def _built(output: U, _text: str) -> U:
    return output


def _bites(
    children: Sequence[Tree[T]],
    offset: int,
    outputs: Sequence[U],
    leaf: LeafFn[U],
) -> list[Bite[U]]:
    bites: list[Bite[U]] = []
    cursor = offset
    for child, output in zip(children, outputs):
        gap = child.range.start - cursor
        if gap > 0:
            bites.append((gap, leaf))
        bites.append((len(child.range), partial(_built, output)))
        cursor = child.range.end
    return bites


def _build_trees(
    forest: Sequence[Tree[T]],
    text: str,
    leaf: LeafFn[U],
    node: NodeFn[T, U],
) -> list[U]:
    """Build one output per top-level tree, children before parents."""
    outputs: list[U] = []
    stack: list[tuple[Tree[T], bool]] = [(tree, False) for tree in reversed(forest)]
    while stack:
        tree, expanded = stack.pop()
        if not expanded:
            stack.append((tree, True))
            stack.extend((child, False) for child in reversed(tree.children))
            continue
        # The children's outputs are the last len(children) entries
        split = len(outputs) - len(tree.children)
        child_outputs = outputs[split:]
        del outputs[split:]
        span = text[tree.range.start : tree.range.end]
        bites = _bites(tree.children, tree.range.start, child_outputs, leaf)
        outputs.append(node(tree.range.tag, slice_parse(span, bites, leaf)))
    return outputs


def materialize(
    forest: Sequence[Tree[T]],
    text: str,
    leaf: LeafFn[U],
    node: NodeFn[T, U],
) -> list[U]:
    """Walk ``forest`` over ``text`` and build output nodes.

    Args:
        forest: Ordered forest from ``build_forest``; positions index ``text``.
        text: The text the forest's ranges refer to.
        leaf: Builds an output item from untagged text.
        node: Builds an output item from a tag and its children's outputs.

    Returns:
        Top-level output items covering all of ``text`` in order.
    """
    outputs = _build_trees(forest, text, leaf, node)
    return slice_parse(text, _bites(forest, 0, outputs, leaf), leaf)


def trees(formatted: FormattedText[T], leaf: LeafFn[U], node: NodeFn[T, U]) -> list[U]:
    """Build the forest for ``formatted`` and materialize it in one step."""
    return materialize(build_forest(formatted.ranges), formatted.text, leaf, node)


def _make_node(tag: T, children: list[Leaf | Node[T]]) -> Node[T]:
    return Node(tag, tuple(children))


def to_nodes(formatted: FormattedText[T]) -> list[Leaf | Node[T]]:
    """Materialize ``formatted`` into generic ``Leaf`` / ``Node`` values."""
    return trees(formatted, Leaf, _make_node)


def from_nodes(nodes: Iterable[Leaf | Node[T]]) -> FormattedText[T]:
    """Flatten ``Leaf`` / ``Node`` values back into formatted text."""
    parts: list[str] = []
    ranges: list[Range[T]] = []
    position = 0
    # Each entry: remaining siblings, the node that owns them, its start
    stack: list[tuple[Iterator[Leaf | Node[T]], Node[T] | None, int]] = [(iter(nodes), None, 0)]
    while stack:
        items, owner, start = stack[-1]
        item = next(items, None)
        if item is None:
            stack.pop()
            if owner is not None:
                ranges.append(Range(owner.tag, start, position))
        elif isinstance(item, Leaf):
            parts.append(item.text)
            position += len(item.text)
        else:
            stack.append((iter(item.children), item, position))
    return FormattedText("".join(parts), ranges)
