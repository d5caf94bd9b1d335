"""Unit tests for tree materialization."""

from collections.abc import Callable

import pytest

from markforest.markup import (
    FormattedText,
    Leaf,
    Node,
    Range,
    build_forest,
    from_nodes,
    from_text,
    materialize,
    to_nodes,
    trees,
)

SEEDS = range(60)


def _render(tag: str, children: list[str]) -> str:
    return f"<{tag}>{''.join(children)}</{tag}>"


class TestMaterialize:
    """Tests for materialize and trees."""

    @pytest.mark.unit
    def test_plain_text_is_single_leaf(self) -> None:
        """With no ranges the whole text is one leaf."""
        assert materialize((), "abc", str.upper, _render) == ["ABC"]

    @pytest.mark.unit
    def test_empty_text_produces_nothing(self) -> None:
        """No text and no ranges produce no output."""
        assert materialize((), "", str, _render) == []

    @pytest.mark.unit
    def test_gaps_become_leaves(self) -> None:
        """Untagged text before, between, and after trees becomes leaves."""
        ft = from_text("ab cd ef").apply("x", 3, 5)
        assert trees(ft, str, _render) == ["ab ", "<x>cd</x>", " ef"]

    @pytest.mark.unit
    def test_nested_rendering(self) -> None:
        """Child trees render inside their parents."""
        ft = from_text("abcdef").apply("b", 0, 6).apply("i", 2, 4)
        assert "".join(trees(ft, str, _render)) == "<b>ab<i>cd</i>ef</b>"

    @pytest.mark.unit
    def test_crossing_ranges_are_split(self) -> None:
        """Crossing ranges render as properly nested fragments."""
        ft = from_text("abcd").apply("b", 0, 3).apply("i", 2, 4)
        assert "".join(trees(ft, str, _render)) == "<b>ab<i>c</i></b><i>d</i>"

    @pytest.mark.unit
    def test_adjacent_children_have_no_empty_leaves(self) -> None:
        """Zero-length gaps are omitted."""
        forest = build_forest([Range("x", 0, 2), Range("y", 2, 4)])
        assert materialize(forest, "abcd", lambda s: f"[{s}]", _render) == [
            "<x>[ab]</x>",
            "<y>[cd]</y>",
        ]

    @pytest.mark.unit
    def test_hard_case_rendering(self, hard_case: FormattedText[str]) -> None:
        """The hard case renders with blue split around green/red."""
        rendered = "".join(trees(hard_case, str, _render))
        assert rendered == "<blue>a</blue><green><red><blue>b</blue>c</red></green>d"


class TestNodes:
    """Tests for Leaf/Node materialization and its inverse."""

    @pytest.mark.unit
    def test_to_nodes_structure(self) -> None:
        """to_nodes builds generic Leaf and Node values."""
        ft = from_text("abc").apply("x", 1, 2)
        assert to_nodes(ft) == [Leaf("a"), Node("x", (Leaf("b"),)), Leaf("c")]

    @pytest.mark.unit
    def test_from_nodes_rebuilds_ranges(self) -> None:
        """from_nodes recovers text and ranges."""
        nodes = [Leaf("a"), Node("x", (Leaf("b"), Node("y", (Leaf("c"),)))), Leaf("d")]
        ft = from_nodes(nodes)
        assert ft.text == "abcd"
        assert set(ft.ranges) == {Range("x", 1, 3), Range("y", 2, 3)}

    @pytest.mark.unit
    @pytest.mark.parametrize("seed", SEEDS)
    def test_nodes_round_trip(
        self, seed: int, random_formatted_text: Callable[[int], FormattedText[str]]
    ) -> None:
        """Materializing and flattening back reconstructs the original."""
        ft = random_formatted_text(seed)
        assert from_nodes(to_nodes(ft)) == ft

    @pytest.mark.unit
    @pytest.mark.parametrize("seed", SEEDS)
    def test_leaves_cover_text(
        self, seed: int, random_formatted_text: Callable[[int], FormattedText[str]]
    ) -> None:
        """Leaf texts concatenate to the original text."""
        ft = random_formatted_text(seed)
        assert "".join(trees(ft, str, lambda _tag, children: "".join(children))) == ft.text


class TestDeepNesting:
    """Materializing forests nested deeper than the recursion limit."""

    @pytest.mark.unit
    @pytest.mark.slow
    def test_deep_nodes_round_trip(self) -> None:
        """2000 nested tags materialize level by level and flatten back."""
        depth = 2000
        ft = FormattedText("x" * (2 * depth), [Range(i, i, 2 * depth - i) for i in range(depth)])
        nodes = to_nodes(ft)
        assert len(nodes) == 1
        item = nodes[0]
        for tag in range(depth - 1):
            assert isinstance(item, Node)
            assert item.tag == tag
            left, item, right = item.children
            assert left == Leaf("x")
            assert right == Leaf("x")
        assert item == Node(depth - 1, (Leaf("xx"),))
        assert from_nodes(nodes) == ft
