"""Position-based slicing parser.

Consumes a string by repeatedly cutting ``length`` characters off the
front and passing them to a transform. Whatever is left after the last
bite goes to a single remainder transform.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from markforest.markup.types import U

Bite = tuple[int, Callable[[str], U]]
"""One slicing step: how many characters to take and what to do with them."""


def slice_parse(
    text: str,
    bites: Sequence[Bite[U]],
    remainder: Callable[[str], U],
) -> list[U]:
    """Split ``text`` into consecutive bites and transform each one.

    Output covers the whole input with no gaps and no overlaps. Every
    bite produces one item (a bite longer than the remaining text takes
    what is left). The remainder transform runs only if text is left
    over after the final bite.

    Args:
        text: String to consume from the front.
        bites: Ordered ``(length, transform)`` steps. Negative lengths
            are treated as zero.
        remainder: Transform for any trailing text.

    Returns:
        One item per bite, plus one for the remainder when non-empty.

    Examples:
        >>> slice_parse("abcdef", [(2, str.upper), (1, str)], lambda s: s * 2)
        ['AB', 'c', 'defdef']
        >>> slice_parse("ab", [(2, str.upper)], lambda s: s)
        ['AB']
    """
    results: list[U] = []
    rest = text
    for length, transform in bites:
        cut = max(length, 0)
        results.append(transform(rest[:cut]))
        rest = rest[cut:]
    if rest:
        results.append(remainder(rest))
    return results
