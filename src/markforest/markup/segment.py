"""Flat chunk segmentation (no nesting).

Splits text into runs paired with the tags active over each run. A cut
is made at every range boundary, even where the active tag set does not
change across it, so every range edge is also a chunk edge.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from markforest.markup.formatted_text import FormattedText
from markforest.markup.types import Range, T

Boundary = Literal["start", "end"]

Chunk = tuple[str, list[T]]
"""A run of text and the tags whose ranges cover it."""


def _boundaries(ranges: Iterable[Range[T]]) -> list[tuple[int, Boundary, T]]:
    events: list[tuple[int, Boundary, T]] = []
    for r in ranges:
        events.append((r.start, "start", r.tag))
        events.append((r.end, "end", r.tag))
    # Stable sort on position only; tags need not be orderable.
    return sorted(events, key=lambda event: event[0])


def segment(ranges: Iterable[Range[T]], text: str) -> list[Chunk[T]]:
    """Decompose ``text`` into chunks with their active tags.

    Boundaries are processed right to left: each one cuts off the
    rightmost piece of the remaining text. Walking backwards, an ``end``
    boundary opens its tag and a ``start`` boundary closes it. Empty
    pieces are discarded.

    Args:
        ranges: Ranges over ``text``.
        text: The underlying plain text.

    Returns:
        Chunks covering ``text`` left to right with no gaps. Tags within a
        chunk are listed in the order they were opened.

    Examples:
        >>> segment([Range("A", 0, 3), Range("B", 8, 11)], "foo bar baz")
        [('foo', ['A']), (' bar ', []), ('baz', ['B'])]
    """
    open_tags: list[T] = []
    remaining = text
    chunks: list[Chunk[T]] = []

    for position, boundary, tag in reversed(_boundaries(ranges)):
        piece = remaining[position:]
        remaining = remaining[:position]
        if piece:
            chunks.append((piece, list(open_tags)))
        if boundary == "end":
            open_tags.append(tag)
        elif tag in open_tags:
            open_tags.remove(tag)

    if remaining:
        chunks.append((remaining, list(open_tags)))

    chunks.reverse()
    return chunks


def desegment(chunks: Sequence[Chunk[T]]) -> FormattedText[T]:
    """Rebuild formatted text from chunks; the inverse of ``segment``.

    Each chunk's tags are applied over the whole chunk, and chunks are
    joined right to left so same-tag ranges meeting at a seam merge.
    """
    result: FormattedText[T] = FormattedText("")
    for piece, tags in reversed(chunks):
        part: FormattedText[T] = FormattedText(piece)
        for tag in tags:
            part = part.apply(tag, 0, len(piece))
        result = part.concat(result)
    return result


def chunks(formatted: FormattedText[T]) -> list[Chunk[T]]:
    """Segment ``formatted`` using its own ranges and text."""
    return segment(formatted.ranges, formatted.text)
