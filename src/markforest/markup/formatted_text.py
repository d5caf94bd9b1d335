"""Formatted text: plain text plus an invariant-preserving set of ranges.

Invariants maintained after every insertion:
- Ranges sharing a tag are pairwise disjoint and non-touching
  (``a.end == b.start`` counts as overlap and triggers a merge).
- No zero-length range is retained.
- Every range lies within ``[0, len(text)]``.

Ranges with different tags may overlap arbitrarily. Out-of-bounds input
is clamped, never rejected.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Generic

from markforest.markup.types import Range, T


def clamp_range(new_range: Range[T], length: int) -> Range[T]:
    """Clamp a range's bounds into ``[0, length]`` with ``end >= start``.

    Examples:
        >>> clamp_range(Range("b", -3, 99), 5)
        Range(tag='b', start=0, end=5)
        >>> clamp_range(Range("b", 4, 2), 5)
        Range(tag='b', start=4, end=4)
    """
    start = min(max(new_range.start, 0), length)
    end = min(max(new_range.end, start), length)
    return new_range.with_bounds(start, end)


def _touches(a: Range[T], b: Range[T]) -> bool:
    return a.tag == b.tag and a.start <= b.end and b.start <= a.end


def _merge_into(ranges: Sequence[Range[T]], new_range: Range[T], length: int) -> tuple[Range[T], ...]:
    """Insert ``new_range`` into ``ranges``, merging same-tag neighbours."""
    clamped = clamp_range(new_range, length)
    overlapping = [r for r in ranges if _touches(r, clamped)]
    untouched = [r for r in ranges if not _touches(r, clamped)]

    merged = clamped.with_bounds(
        min([clamped.start, *(r.start for r in overlapping)]),
        max([clamped.end, *(r.end for r in overlapping)]),
    )
    if merged.start == merged.end:
        return tuple(untouched)
    return (*untouched, merged)


class FormattedText(Generic[T]):
    """Immutable text annotated with tagged ranges.

    Every operation returns a new instance; the text itself never changes.
    Equality requires equal text and equal range sets, compared as
    unordered collections using the tags' own equality.
    """

    __slots__ = ("_ranges", "_text")

    def __init__(self, text: str = "", ranges: Iterable[Range[T]] = ()) -> None:
        self._text = text
        merged: tuple[Range[T], ...] = ()
        for r in ranges:
            merged = _merge_into(merged, r, len(text))
        self._ranges = merged

    @classmethod
    def from_text(cls, text: str) -> FormattedText[T]:
        """Create formatted text with no ranges."""
        return cls(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def ranges(self) -> tuple[Range[T], ...]:
        return self._ranges

    def insert_range(self, new_range: Range[T]) -> FormattedText[T]:
        """Return a copy with ``new_range`` added and all invariants restored.

        The range is clamped into ``[0, len(text)]``. Existing ranges with
        the same tag that intersect or touch it are absorbed into a single
        merged range; a merged range of length zero is discarded.

        Args:
            new_range: Range to add. Bounds outside the text are clamped.

        Returns:
            New FormattedText with the same text.
        """
        result: FormattedText[T] = FormattedText(self._text)
        result._ranges = _merge_into(self._ranges, new_range, len(self._text))
        return result

    def insert_ranges(self, ranges: Iterable[Range[T]]) -> FormattedText[T]:
        """Insert several ranges, left to right."""
        result = self
        for r in ranges:
            result = result.insert_range(r)
        return result

    def apply(self, tag: T, start: int, end: int) -> FormattedText[T]:
        """Shorthand for ``insert_range(Range(tag, start, end))``."""
        return self.insert_range(Range(tag, start, end))

    def canonical_ranges(self) -> list[Range[T]]:
        """Return ranges ordered by first-seen tag, then by start.

        Tags are numbered in the order they first appear in ``ranges``.
        Only tag equality is used, so unhashable tags are supported.
        """
        seen: list[T] = []
        for r in self._ranges:
            if not any(r.tag == tag for tag in seen):
                seen.append(r.tag)

        def _key(r: Range[T]) -> tuple[int, int, int]:
            index = next(i for i, tag in enumerate(seen) if tag == r.tag)
            return (index, r.start, r.end)

        return sorted(self._ranges, key=_key)

    # -------------------------------------------------------------------------
    # Text-changing constructors
    # -------------------------------------------------------------------------

    def concat(self, other: FormattedText[T]) -> FormattedText[T]:
        """Append ``other``; same-tag ranges touching at the seam merge."""
        offset = len(self._text)
        result: FormattedText[T] = FormattedText(self._text + other._text, self._ranges)
        return result.insert_ranges(r.shifted(offset) for r in other._ranges)

    def slice(self, start: int | None = None, end: int | None = None) -> FormattedText[T]:
        """Return the sub-text ``text[start:end]`` with ranges cut to fit.

        Bounds follow Python slicing: negative values count from the end and
        out-of-range values are clamped. Ranges are intersected with the
        window and shifted; ranges that fall outside it are dropped.
        """
        lo, hi, _ = slice(start, end).indices(len(self._text))
        hi = max(lo, hi)
        window: list[Range[T]] = []
        for r in self._ranges:
            cut_start = max(r.start, lo)
            cut_end = min(r.end, hi)
            if cut_start < cut_end:
                window.append(r.with_bounds(cut_start - lo, cut_end - lo))
        return FormattedText(self._text[lo:hi], window)

    def reverse(self) -> FormattedText[T]:
        """Reverse the text, mirroring every range."""
        n = len(self._text)
        return FormattedText(
            self._text[::-1],
            (r.with_bounds(n - r.end, n - r.start) for r in self._ranges),
        )

    # -------------------------------------------------------------------------
    # Dunder protocol
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> FormattedText[T]:
        if isinstance(other, FormattedText):
            return self.concat(other)
        if isinstance(other, str):
            return FormattedText(self._text + other, self._ranges)
        return NotImplemented

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormattedText):
            return NotImplemented
        if self._text != other._text or len(self._ranges) != len(other._ranges):
            return False
        remaining = list(other._ranges)
        for r in self._ranges:
            for i, candidate in enumerate(remaining):
                if candidate == r:
                    del remaining[i]
                    break
            else:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FormattedText(text={self._text!r}, ranges={self.canonical_ranges()!r})"


def from_text(text: str) -> FormattedText[T]:
    """Create formatted text with an empty range set."""
    return FormattedText(text)


def insert_range(new_range: Range[T], formatted: FormattedText[T]) -> FormattedText[T]:
    """Insert ``new_range`` into ``formatted``; see ``FormattedText.insert_range``."""
    return formatted.insert_range(new_range)
