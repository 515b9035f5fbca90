"""Structural markdown scanning built on markdown-it tokens.

Links and headings are read from the parsed token stream, so anything inside
code blocks, code spans or escaped text never counts as a link or a title.
"""

from __future__ import annotations

from collections.abc import Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

# Cached parser instance; MarkdownIt is stateless between parse() calls
_md: MarkdownIt | None = None


def _get_parser() -> MarkdownIt:
    global _md
    if _md is None:
        _md = MarkdownIt("commonmark")
    return _md


def parse_tokens(content: str) -> list[Token]:
    """Parse markdown into markdown-it block tokens."""
    return _get_parser().parse(content)


def _text_runs(children: list[Token]) -> Iterator[str]:
    """Yield the plain text of inline tokens, including image alt text."""
    for child in children:
        if child.type == "text":
            yield child.content
        elif child.type == "image":
            yield from _text_runs(child.children or [])


def iter_link_destinations(content: str) -> Iterator[str]:
    """Yield the destination of every link in document order.

    Images are not links and are skipped. Destinations are returned as the
    parser normalized them (non-ASCII and spaces percent-encoded).

    Args:
        content: Raw markdown content.

    Yields:
        Link destinations, duplicates included.
    """
    for token in parse_tokens(content):
        if token.type != "inline" or not token.children:
            continue
        for child in token.children:
            if child.type == "link_open":
                href = child.attrGet("href")
                if href is not None:
                    yield str(href)


def extract_title(content: str, top_level_only: bool = False) -> str | None:
    """Extract the text of the first heading in a document.

    Text runs inside the heading are concatenated and trimmed. Headings whose
    text is empty are skipped.

    Args:
        content: Raw markdown content.
        top_level_only: Only consider level-1 headings.

    Returns:
        The heading text, or None if no suitable heading exists.
    """
    tokens = parse_tokens(content)
    for index, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        if top_level_only and token.tag != "h1":
            continue

        # heading_open is always followed by its inline content
        inline = tokens[index + 1] if index + 1 < len(tokens) else None
        if inline is None or inline.type != "inline":
            continue

        title = "".join(_text_runs(inline.children or [])).strip()
        if title:
            return title

    return None
