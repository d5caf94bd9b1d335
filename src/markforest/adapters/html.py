"""HTML view adapter for formatted text tagged with MarkupTag values.

Two renderings are provided:
- ``render_html`` builds properly nested elements from the markup forest
- ``render_html_flat`` wraps every flat chunk in all of its active tags
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from markforest.config import MarkforestConfig, load_config
from markforest.markup.materialize import trees
from markforest.markup.segment import chunks

if TYPE_CHECKING:
    from markforest.adapters.wikitext import MarkupTag
    from markforest.markup.formatted_text import FormattedText


def _element_name(tag: MarkupTag, config: MarkforestConfig) -> str:
    return config.html_tag_map.get(tag.name, tag.name)


def _open_tag(tag: MarkupTag, config: MarkforestConfig) -> str:
    name = _element_name(tag, config)
    if tag.target is not None:
        return f'<{name} href="{html.escape(tag.target, quote=True)}">'
    return f"<{name}>"


def _close_tag(tag: MarkupTag, config: MarkforestConfig) -> str:
    return f"</{_element_name(tag, config)}>"


def _escape(text: str, config: MarkforestConfig) -> str:
    return html.escape(text, quote=False) if config.html_escape else text


def render_html(formatted: FormattedText[MarkupTag], config: MarkforestConfig | None = None) -> str:
    """Render formatted text as nested HTML.

    Crossing ranges are split by the forest builder, so the output is
    always well formed.

    Examples:
        >>> from markforest.adapters.wikitext import MarkupTag
        >>> from markforest.markup import FormattedText, Range
        >>> ft = FormattedText("abcd", [Range(MarkupTag("b"), 0, 3), Range(MarkupTag("i"), 2, 4)])
        >>> render_html(ft, MarkforestConfig())
        '<b>ab<i>c</i></b><i>d</i>'
    """
    cfg = config or load_config()

    def _leaf(text: str) -> str:
        return _escape(text, cfg)

    def _node(tag: MarkupTag, children: list[str]) -> str:
        return _open_tag(tag, cfg) + "".join(children) + _close_tag(tag, cfg)

    return "".join(trees(formatted, _leaf, _node))


def render_html_flat(
    formatted: FormattedText[MarkupTag], config: MarkforestConfig | None = None
) -> str:
    """Render formatted text chunk by chunk without nesting across chunks.

    Examples:
        >>> from markforest.adapters.wikitext import MarkupTag
        >>> from markforest.markup import FormattedText, Range
        >>> ft = FormattedText("abcd", [Range(MarkupTag("b"), 0, 3), Range(MarkupTag("i"), 2, 4)])
        >>> render_html_flat(ft, MarkforestConfig())
        '<b>ab</b><i><b>c</b></i><i>d</i>'
    """
    cfg = config or load_config()
    parts: list[str] = []
    for piece, tags in chunks(formatted):
        opening = "".join(_open_tag(tag, cfg) for tag in tags)
        closing = "".join(_close_tag(tag, cfg) for tag in reversed(tags))
        parts.append(opening + _escape(piece, cfg) + closing)
    return "".join(parts)
