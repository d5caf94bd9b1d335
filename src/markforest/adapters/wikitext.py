"""Wikitext adapter: MediaWiki inline markup to formatted text.

This module turns MediaWiki markup into plain text plus tagged ranges:
- ''italic'' and '''bold''' - ``i`` and ``b`` ranges
- <u>, <s>, <code>, ... - a range named after the HTML tag
- == Heading == - ``h<level>`` range over the heading title
- [[Target|text]], [https://url text] - ``a`` ranges carrying the target

Uses mwparserfromhell for reliable MediaWiki parsing. Structure that has
no inline-markup equivalent (templates, template arguments, tables) is
reported as a ``WikitextParseError`` value rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import mwparserfromhell
from mwparserfromhell.nodes import (
    Argument,
    Comment,
    ExternalLink,
    Heading,
    HTMLEntity,
    Tag,
    Template,
    Text,
    Wikilink,
)

from markforest.config import MarkforestConfig, load_config
from markforest.markup.formatted_text import FormattedText
from markforest.markup.types import Range

if TYPE_CHECKING:
    from mwparserfromhell.nodes import Node
    from mwparserfromhell.wikicode import Wikicode

logger = logging.getLogger(__name__)

# Link prefixes that produce no visible text
HIDDEN_LINK_PREFIXES: frozenset[str] = frozenset(["Category:", "File:", "Image:", "Media:"])


@dataclass(frozen=True)
class MarkupTag:
    """Tag produced by the wikitext adapter.

    Attributes:
        name: Markup name (``b``, ``i``, ``u``, ``h2``, ``a``, ...).
        target: Link target for ``a`` tags, None otherwise.
    """

    name: str
    target: str | None = None

    def label(self) -> str:
        """Return ``name`` or ``name:target`` for display and serialization."""
        return self.name if self.target is None else f"{self.name}:{self.target}"


@dataclass(frozen=True)
class WikitextParseError:
    """Returned when the source contains structure the adapter cannot express.

    Attributes:
        message: Human-readable description of the problem.
        node: Source markup of the offending node.
        position: Offset in the plain text produced so far.
    """

    message: str
    node: str
    position: int


class _UnsupportedNodeError(Exception):
    def __init__(self, message: str, node: Node, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.node = str(node)
        self.position = position


class _Builder:
    """Accumulates plain text and ranges while walking parsed wikicode."""

    def __init__(self, config: MarkforestConfig) -> None:
        self.config = config
        self.parts: list[str] = []
        self.length = 0
        self.ranges: list[Range[MarkupTag]] = []

    def emit(self, text: str) -> None:
        self.parts.append(text)
        self.length += len(text)

    def tagged(self, tag: MarkupTag, contents: Wikicode) -> None:
        start = self.length
        self.walk(contents)
        self.ranges.append(Range(tag, start, self.length))

    def walk(self, wikicode: Wikicode) -> None:
        for node in wikicode.nodes:
            self.visit(node)

    def visit(self, node: Node) -> None:
        if isinstance(node, Text):
            self.emit(node.value)
            return

        if isinstance(node, HTMLEntity):
            self.emit(node.normalize())
            return

        if isinstance(node, Comment):
            return

        if isinstance(node, Tag):
            self._visit_tag(node)
            return

        if isinstance(node, Heading):
            title = mwparserfromhell.parse(str(node.title).strip())
            self.tagged(MarkupTag(f"h{node.level}"), title)
            return

        if isinstance(node, Wikilink):
            self._visit_wikilink(node)
            return

        if isinstance(node, ExternalLink):
            tag = MarkupTag("a", str(node.url).strip())
            if node.title is not None and str(node.title).strip():
                self.tagged(tag, node.title)
            else:
                start = self.length
                self.emit(str(node.url))
                self.ranges.append(Range(tag, start, self.length))
            return

        if isinstance(node, Template):
            if self.config.wiki_drop_templates:
                logger.debug(f"Dropping template {str(node.name).strip()!r}")
                return
            raise _UnsupportedNodeError(
                f"Templates are not supported: {str(node.name).strip()}", node, self.length
            )

        if isinstance(node, Argument):
            raise _UnsupportedNodeError("Template arguments are not supported", node, self.length)

        raise _UnsupportedNodeError(
            f"Unsupported node type: {type(node).__name__}", node, self.length
        )

    def _visit_tag(self, node: Tag) -> None:
        name = str(node.tag).strip().lower()

        if name in self.config.wiki_unsupported_tags:
            raise _UnsupportedNodeError(f"Unsupported tag: <{name}>", node, self.length)

        if name in self.config.wiki_line_break_tags:
            self.emit("\n")
            return

        if name in self.config.wiki_skip_tags:
            logger.debug(f"Skipping <{name}> tag")
            return

        if node.self_closing or node.contents is None:
            return

        self.tagged(MarkupTag(name), node.contents)

    def _visit_wikilink(self, node: Wikilink) -> None:
        target = str(node.title).strip()

        if any(target.startswith(prefix) for prefix in HIDDEN_LINK_PREFIXES):
            logger.debug(f"Skipping hidden link [[{target}]]")
            return

        tag = MarkupTag("a", target)
        if node.text is not None and str(node.text).strip():
            self.tagged(tag, node.text)
        else:
            start = self.length
            self.emit(target)
            self.ranges.append(Range(tag, start, self.length))

    def result(self) -> FormattedText[MarkupTag]:
        return FormattedText("".join(self.parts), self.ranges)


def parse_wikitext(
    source: str,
    config: MarkforestConfig | None = None,
) -> FormattedText[MarkupTag] | WikitextParseError:
    """Parse MediaWiki markup into formatted text.

    Args:
        source: MediaWiki markup.
        config: Adapter settings; defaults to the project configuration.

    Returns:
        FormattedText tagged with MarkupTag values, or a WikitextParseError
        describing the first unsupported node.

    Examples:
        >>> ft = parse_wikitext("a '''bold''' move")
        >>> ft.text
        'a bold move'
        >>> ft.ranges
        (Range(tag=MarkupTag(name='b', target=None), start=2, end=6),)
    """
    builder = _Builder(config or load_config())
    wikicode: Wikicode = mwparserfromhell.parse(source)
    try:
        builder.walk(wikicode)
    except _UnsupportedNodeError as e:
        logger.warning(f"Wikitext parse failed at {e.position}: {e.message}")
        return WikitextParseError(message=e.message, node=e.node, position=e.position)
    return builder.result()
