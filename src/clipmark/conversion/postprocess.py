"""String-level cleanup applied to the engine's Markdown output."""

import re

_LEADING_TITLE_RE = re.compile(r"\A# .+\n+")
_EMPTY_LINK_RE = re.compile(r"(?<!!)\[\]\([^)]*\)")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def remove_leading_title(markdown: str) -> str:
    """Drop a leading ``# Title`` line; the page title is carried as metadata."""
    return _LEADING_TITLE_RE.sub("", markdown, count=1)


def remove_empty_links(markdown: str) -> str:
    """Remove ``[](url)`` links, leaving ``![](url)`` images alone."""
    return _EMPTY_LINK_RE.sub("", markdown)


def collapse_blank_lines(markdown: str) -> str:
    return _EXCESS_NEWLINES_RE.sub("\n\n", markdown)


def post_process(markdown: str) -> str:
    markdown = remove_leading_title(markdown)
    markdown = remove_empty_links(markdown)
    return collapse_blank_lines(markdown)
