"""Shared pytest fixtures for markforest tests."""

import random
from collections.abc import Callable
from pathlib import Path

import pytest

from markforest.markup import FormattedText, Range

FIXTURES_DIR = Path(__file__).parent / "fixtures"
WIKITEXT_DIR = FIXTURES_DIR / "wikitext"

# Small tag alphabet so that random ranges collide and cross often
RANDOM_TAGS = ("red", "green", "blue", "bold")


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    """Factory fixture to load wikitext fixture files.

    Usage:
        def test_something(load_fixture):
            content = load_fixture("crossing.txt")
    """

    def _load(name: str) -> str:
        path = WIKITEXT_DIR / name
        return path.read_text(encoding="utf-8")

    return _load


def make_random_ranges(rng: random.Random, length: int, count: int) -> list[Range[str]]:
    """Generate ranges with arbitrary (possibly out-of-bounds) positions."""
    ranges: list[Range[str]] = []
    for _ in range(count):
        start = rng.randint(-2, length + 2)
        end = rng.randint(start - 1, length + 2)
        ranges.append(Range(rng.choice(RANDOM_TAGS), start, end))
    return ranges


def make_random_formatted_text(seed: int) -> FormattedText[str]:
    """Build a reproducible random FormattedText for property tests."""
    rng = random.Random(seed)
    length = rng.randint(0, 24)
    text = "".join(rng.choice("abcdefgh ") for _ in range(length))
    formatted: FormattedText[str] = FormattedText(text)
    for r in make_random_ranges(rng, length, rng.randint(0, 8)):
        formatted = formatted.insert_range(r)
    return formatted


@pytest.fixture
def random_formatted_text() -> Callable[[int], FormattedText[str]]:
    """Factory fixture producing random FormattedText values from a seed."""
    return make_random_formatted_text


@pytest.fixture
def hard_case() -> FormattedText[str]:
    """Three crossing ranges where a split node's children cross the split."""
    return FormattedText(
        "abcd",
        [Range("red", 1, 3), Range("green", 1, 3), Range("blue", 0, 2)],
    )


@pytest.fixture
def random_ranges() -> Callable[[int], tuple[str, list[Range[str]]]]:
    """Factory fixture producing (text, raw ranges) from a seed.

    The ranges are not normalized: they may be empty, out of bounds, or
    overlap other ranges with the same tag.
    """

    def _make(seed: int) -> tuple[str, list[Range[str]]]:
        rng = random.Random(seed)
        length = rng.randint(1, 20)
        text = "".join(rng.choice("wxyz") for _ in range(length))
        return text, make_random_ranges(rng, length, rng.randint(1, 10))

    return _make
