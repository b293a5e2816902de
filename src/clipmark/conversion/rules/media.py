"""Figures, video/social embeds and inline highlight/strikethrough marks."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse

from bs4 import Tag

from ..dom import attr
from .base import Rule, tag_filter, wrap_inline

if TYPE_CHECKING:
    from ..engine import ConversionEngine

_YOUTUBE_HOST_RE = re.compile(r"(?:^|\.)(?:youtube\.com|youtube-nocookie\.com|youtu\.be)$")
_TWITTER_HOST_RE = re.compile(r"(?:^|\.)(?:twitter\.com|x\.com)$")

_YOUTUBE_ID_RE = re.compile(
    r"(?:youtube\.com|youtube-nocookie\.com|youtu\.be)/(?:embed/|watch\?v=|v/)?([a-zA-Z0-9_-]+)"
)
_TWEET_ID_RE = re.compile(r"(?:twitter\.com|x\.com)/.*?(?:status|statuses)/(\d+)")
_TWEET_QUERY_ID_RE = re.compile(r"[?&]id=(\d+)")

# Candidates may be separated by ", " or, in URL-encoded values, by ",%20"
_SRCSET_CANDIDATE_RE = re.compile(r",(?:\s+|%20)")
_SRCSET_DESCRIPTOR_RE = re.compile(r"\s+|%20")


def first_srcset_url(srcset: str) -> str:
    candidate = _SRCSET_CANDIDATE_RE.split(srcset.strip(), maxsplit=1)[0]
    return _SRCSET_DESCRIPTOR_RE.split(candidate.strip(), maxsplit=1)[0]


def _matches_figure(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "figure"


def convert_figure(content: str, node: Tag, engine: ConversionEngine) -> str:
    img = node.find("img")
    if img is None:
        return content

    alt = attr(img, "alt")
    src = attr(img, "src")
    srcset = attr(img, "srcset")
    if srcset:
        src = first_srcset_url(srcset) or src

    figcaption = node.find("figcaption")
    caption = engine.convert_subtree(figcaption) if figcaption is not None else ""

    return f"![{alt}]({src})\n\n{caption}\n\n"


def _iframe_host(node: Tag) -> Optional[str]:
    src = attr(node, "src")
    if not src:
        return None
    try:
        return (urlparse(src).hostname or "").lower()
    except ValueError:
        return None


def _matches_embed(node: Tag, engine: ConversionEngine) -> bool:
    if node.name != "iframe":
        return False
    host = _iframe_host(node)
    return bool(host) and bool(_YOUTUBE_HOST_RE.search(host) or _TWITTER_HOST_RE.search(host))


def convert_embed(content: str, node: Tag, engine: ConversionEngine) -> str:
    src = attr(node, "src")

    match = _YOUTUBE_ID_RE.search(src)
    if match:
        return f"![](https://www.youtube.com/watch?v={match.group(1)})"

    match = _TWEET_ID_RE.search(src) or _TWEET_QUERY_ID_RE.search(src)
    if match:
        return f"![](https://x.com/i/status/{match.group(1)})"

    # Recognized host without a usable id: keep the iframe as-is
    return str(node)


def convert_highlight(content: str, node: Tag, engine: ConversionEngine) -> str:
    return wrap_inline(content, "==")


def convert_strikethrough(content: str, node: Tag, engine: ConversionEngine) -> str:
    return wrap_inline(content, "~~")


FIGURE_RULE = Rule("figure", _matches_figure, convert_figure)
EMBED_RULE = Rule("embedToMarkdown", _matches_embed, convert_embed)
HIGHLIGHT_RULE = Rule("highlight", tag_filter("mark"), convert_highlight)
STRIKETHROUGH_RULE = Rule("strikethrough", tag_filter("del", "s", "strike"), convert_strikethrough)
