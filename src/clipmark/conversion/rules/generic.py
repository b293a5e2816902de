"""CommonMark rules for ordinary elements and the catch-all default."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import Tag

from ..dom import attr, closest, is_block
from .base import Rule, tag_filter, wrap_inline
from .removals import remove

if TYPE_CHECKING:
    from ..engine import ConversionEngine

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
REMOVED_TAGS = ("script", "style", "button")
# Emitted as raw HTML
KEPT_TAGS = ("iframe", "video", "audio", "sup", "sub", "svg", "math")

_BACKTICK_RUN_RE = re.compile(r"`+")


def convert_paragraph(content: str, node: Tag, engine: ConversionEngine) -> str:
    return f"\n\n{content.strip()}\n\n"


def convert_line_break(content: str, node: Tag, engine: ConversionEngine) -> str:
    return "  \n"


def convert_heading(content: str, node: Tag, engine: ConversionEngine) -> str:
    level = int(node.name[1])
    text = content.strip().replace("\n", " ")
    if engine.options.heading_style == "setext" and level < 3:
        underline = ("=" if level == 1 else "-") * len(text)
        return f"\n\n{text}\n{underline}\n\n"
    return f"\n\n{'#' * level} {text}\n\n"


def convert_blockquote(content: str, node: Tag, engine: ConversionEngine) -> str:
    lines = content.strip("\n").split("\n")
    quoted = "\n".join("> " + line for line in lines)
    return f"\n\n{quoted}\n\n"


def convert_horizontal_rule(content: str, node: Tag, engine: ConversionEngine) -> str:
    return f"\n\n{engine.options.hr}\n\n"


def _matches_inline_code(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "code" and closest(node, "pre") is None


def convert_inline_code(content: str, node: Tag, engine: ConversionEngine) -> str:
    text = re.sub(r"\r?\n|\r", " ", node.get_text())
    if not text:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    delimiter = "`" * (longest + 1)
    padding = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{delimiter}{padding}{text}{padding}{delimiter}"


def convert_emphasis(content: str, node: Tag, engine: ConversionEngine) -> str:
    return wrap_inline(content, engine.options.em_delimiter)


def convert_strong(content: str, node: Tag, engine: ConversionEngine) -> str:
    return wrap_inline(content, "**")


def _matches_link(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "a" and node.has_attr("href")


def _title_part(node: Tag) -> str:
    title = attr(node, "title")
    if not title:
        return ""
    return ' "' + title.replace('"', '\\"') + '"'


def convert_link(content: str, node: Tag, engine: ConversionEngine) -> str:
    href = attr(node, "href").replace("(", "\\(").replace(")", "\\)")
    return f"[{content}]({href}{_title_part(node)})"


def convert_image(content: str, node: Tag, engine: ConversionEngine) -> str:
    src = attr(node, "src")
    if not src:
        return ""
    alt = attr(node, "alt").replace("\n", " ")
    return f"![{alt}]({src}{_title_part(node)})"


def keep_element(content: str, node: Tag, engine: ConversionEngine) -> str:
    if is_block(node):
        return f"\n\n{node}\n\n"
    return str(node)


def convert_default(content: str, node: Tag, engine: ConversionEngine) -> str:
    if is_block(node):
        return f"\n\n{content}\n\n"
    return content


GENERIC_RULES = (
    Rule("remove", tag_filter(*REMOVED_TAGS), remove),
    Rule("keep", tag_filter(*KEPT_TAGS), keep_element),
    Rule("paragraph", tag_filter("p"), convert_paragraph),
    Rule("lineBreak", tag_filter("br"), convert_line_break),
    Rule("heading", tag_filter(*HEADING_TAGS), convert_heading),
    Rule("blockquote", tag_filter("blockquote"), convert_blockquote),
    Rule("horizontalRule", tag_filter("hr"), convert_horizontal_rule),
    Rule("code", _matches_inline_code, convert_inline_code),
    Rule("emphasis", tag_filter("em", "i"), convert_emphasis),
    Rule("strong", tag_filter("strong", "b"), convert_strong),
    Rule("inlineLink", _matches_link, convert_link),
    Rule("image", tag_filter("img"), convert_image),
)

DEFAULT_RULE = Rule("default", lambda node, engine: True, convert_default)
