"""Unit tests for the wikitext adapter.

Wikitext markup handled:
- ''italic'', '''bold''', inline HTML tags
- == headings ==
- [[internal links]] and [external links]
- <ref>, <br>, comments, entities
- templates and tables reported as WikitextParseError
"""

from collections.abc import Callable

import pytest

from markforest.adapters.wikitext import MarkupTag, WikitextParseError, parse_wikitext
from markforest.config import MarkforestConfig
from markforest.markup import FormattedText


@pytest.fixture
def config() -> MarkforestConfig:
    return MarkforestConfig()


def _spans(ft: FormattedText[MarkupTag]) -> set[tuple[str, str]]:
    """Return (label, covered text) pairs for readable assertions."""
    return {(r.tag.label(), ft.text[r.start : r.end]) for r in ft.ranges}


def _parse(source: str, config: MarkforestConfig) -> FormattedText[MarkupTag]:
    result = parse_wikitext(source, config)
    assert isinstance(result, FormattedText), result
    return result


class TestInlineStyles:
    """Tests for bold, italic, and HTML-style tags."""

    @pytest.mark.unit
    def test_bold(self, config: MarkforestConfig) -> None:
        """'''x''' should become a b range."""
        ft = _parse("a '''bold''' move", config)
        assert ft.text == "a bold move"
        assert _spans(ft) == {("b", "bold")}

    @pytest.mark.unit
    def test_italic(self, config: MarkforestConfig) -> None:
        """''x'' should become an i range."""
        ft = _parse("an ''italic'' word", config)
        assert ft.text == "an italic word"
        assert _spans(ft) == {("i", "italic")}

    @pytest.mark.unit
    def test_nested_styles(self, config: MarkforestConfig) -> None:
        """Nested markup produces nested ranges."""
        ft = _parse("'''bold ''both'' bold'''", config)
        assert ft.text == "bold both bold"
        assert _spans(ft) == {("b", "bold both bold"), ("i", "both")}

    @pytest.mark.unit
    def test_html_tags(self, config: MarkforestConfig) -> None:
        """Inline HTML tags become ranges named after the tag."""
        ft = _parse("x <u>under</u> <code>c()</code>", config)
        assert ft.text == "x under c()"
        assert _spans(ft) == {("u", "under"), ("code", "c()")}

    @pytest.mark.unit
    def test_plain_text_has_no_ranges(self, config: MarkforestConfig) -> None:
        """Text without markup passes through untouched."""
        ft = _parse("nothing to see", config)
        assert ft.text == "nothing to see"
        assert ft.ranges == ()


class TestLinks:
    """Tests for wiki and external links."""

    @pytest.mark.unit
    def test_piped_link(self, config: MarkforestConfig) -> None:
        """[[Target|text]] tags the display text with the target."""
        ft = _parse("see [[Karl Marx|Marx]] here", config)
        assert ft.text == "see Marx here"
        assert _spans(ft) == {("a:Karl Marx", "Marx")}

    @pytest.mark.unit
    def test_simple_link(self, config: MarkforestConfig) -> None:
        """[[Target]] shows the target itself."""
        ft = _parse("[[Paris]]", config)
        assert ft.text == "Paris"
        assert _spans(ft) == {("a:Paris", "Paris")}

    @pytest.mark.unit
    def test_category_link_hidden(self, config: MarkforestConfig) -> None:
        """Category links produce no text."""
        ft = _parse("end[[Category:History]]", config)
        assert ft.text == "end"
        assert ft.ranges == ()

    @pytest.mark.unit
    def test_external_link_with_title(self, config: MarkforestConfig) -> None:
        """[url title] tags the title with the url."""
        ft = _parse("[https://example.org the site]", config)
        assert ft.text == "the site"
        assert _spans(ft) == {("a:https://example.org", "the site")}

    @pytest.mark.unit
    def test_link_tags_are_distinct_per_target(self, config: MarkforestConfig) -> None:
        """Adjacent links to different targets are not merged."""
        ft = _parse("[[A]][[B]]", config)
        assert _spans(ft) == {("a:A", "A"), ("a:B", "B")}


class TestSpecialNodes:
    """Tests for headings, refs, breaks, comments, and entities."""

    @pytest.mark.unit
    def test_heading(self, config: MarkforestConfig) -> None:
        """== x == becomes an h2 range over the title."""
        ft = _parse("== Overview ==\nbody", config)
        assert ft.text == "Overview\nbody"
        assert _spans(ft) == {("h2", "Overview")}

    @pytest.mark.unit
    def test_ref_dropped(self, config: MarkforestConfig) -> None:
        """<ref> contents never reach the text."""
        ft = _parse("claim<ref>source</ref>.", config)
        assert ft.text == "claim."

    @pytest.mark.unit
    def test_line_break(self, config: MarkforestConfig) -> None:
        """<br/> becomes a newline."""
        ft = _parse("a<br/>b", config)
        assert ft.text == "a\nb"

    @pytest.mark.unit
    def test_comment_dropped(self, config: MarkforestConfig) -> None:
        """Comments produce no text."""
        assert _parse("a<!-- note -->b", config).text == "ab"

    @pytest.mark.unit
    def test_entity_normalized(self, config: MarkforestConfig) -> None:
        """HTML entities become their characters."""
        assert _parse("R&amp;D", config).text == "R&D"


class TestFixtures:
    """Tests against fixture files."""

    @pytest.mark.unit
    def test_article_fixture(
        self, config: MarkforestConfig, load_fixture: Callable[[str], str]
    ) -> None:
        """A realistic article parses to clean text and expected spans."""
        ft = _parse(load_fixture("article.txt"), config)
        assert ft.text.startswith("Overview\nThe Paris Commune was a revolutionary government")
        assert "Civil War" not in ft.text
        assert "hidden" not in ft.text
        assert "History" not in ft.text
        assert {
            ("h2", "Overview"),
            ("b", "Paris Commune"),
            ("i", "revolutionary"),
            ("a:Paris", "Paris"),
            ("a:https://example.org/commune", "the archive"),
        } == _spans(ft)


class TestParseErrors:
    """Tests for unsupported structure."""

    @pytest.mark.unit
    def test_template_is_error(
        self, config: MarkforestConfig, load_fixture: Callable[[str], str]
    ) -> None:
        """Templates are reported, not raised."""
        result = parse_wikitext(load_fixture("template.txt"), config)
        assert isinstance(result, WikitextParseError)
        assert "Infobox country" in result.message
        assert result.position == len("Intro text.\n")
        assert result.node.startswith("{{Infobox country")

    @pytest.mark.unit
    def test_templates_can_be_dropped(self, load_fixture: Callable[[str], str]) -> None:
        """wiki_drop_templates silently removes templates."""
        drop_config = MarkforestConfig(wiki_drop_templates=True)
        result = parse_wikitext(load_fixture("template.txt"), drop_config)
        assert isinstance(result, FormattedText)
        assert result.text == "Intro text.\n\nMore text.\n"

    @pytest.mark.unit
    def test_table_is_error(
        self, config: MarkforestConfig, load_fixture: Callable[[str], str]
    ) -> None:
        """Tables are unsupported."""
        result = parse_wikitext(load_fixture("table.txt"), config)
        assert isinstance(result, WikitextParseError)
        assert "table" in result.message

    @pytest.mark.unit
    def test_template_argument_is_error(self, config: MarkforestConfig) -> None:
        """Template arguments are unsupported."""
        result = parse_wikitext("value: {{{1}}}", config)
        assert isinstance(result, WikitextParseError)
        assert result.position == len("value: ")


class TestMarkupTag:
    """Tests for the MarkupTag value type."""

    @pytest.mark.unit
    def test_label(self) -> None:
        """label() includes the target only when present."""
        assert MarkupTag("b").label() == "b"
        assert MarkupTag("a", "Paris").label() == "a:Paris"

    @pytest.mark.unit
    def test_equality(self) -> None:
        """Tags compare by value."""
        assert MarkupTag("a", "X") == MarkupTag("a", "X")
        assert MarkupTag("a", "X") != MarkupTag("a", "Y")
