"""Adapters between formatted text and external markup formats.

- **wikitext**: MediaWiki inline markup to FormattedText[MarkupTag]
- **html**: FormattedText[MarkupTag] to nested or flat HTML
"""

from markforest.adapters.html import render_html, render_html_flat
from markforest.adapters.wikitext import MarkupTag, WikitextParseError, parse_wikitext

__all__ = [
    "MarkupTag",
    "WikitextParseError",
    "parse_wikitext",
    "render_html",
    "render_html_flat",
]
