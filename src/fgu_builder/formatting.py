"""Markdown to FGU formatted text."""

from __future__ import annotations

import re
from html.entities import name2codepoint
from typing import Callable

import markdown

MarkupConverter = Callable[[str], str]

# Entities every XML parser knows without a DTD.
_XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})
_NAMED_ENTITY_RE = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


def _numeric_entity(match: re.Match[str]) -> str:
    name = match.group(1)
    if name in _XML_ENTITIES:
        return match.group(0)
    if name in name2codepoint:
        return f"&#{name2codepoint[name]};"
    return f"&amp;{name};"


def _markdown() -> markdown.Markdown:
    md = markdown.Markdown(output_format="xhtml")
    # Raw HTML in the source is escaped as text instead of passed through.
    md.preprocessors.deregister("html_block")
    md.inlinePatterns.deregister("html")
    return md


def to_markup(text: str) -> str:
    """Convert a markdown description to the HTML subset FGU renders.

    The result is always well-formed XML: literal HTML tags in ``text`` are
    escaped and HTML named entities become numeric character references.
    An empty string converts to an empty string.
    """
    html = _markdown().convert(text)
    return _NAMED_ENTITY_RE.sub(_numeric_entity, html)
