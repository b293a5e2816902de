"""Callout (admonition) and preformatted code block rules."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import Tag

from ..dom import attr, classes, has_class
from .base import Rule

if TYPE_CHECKING:
    from ..engine import ConversionEngine

CALLOUT_CLASS = "markdown-alert"
CALLOUT_TITLE_CLASS = "markdown-alert-title"

_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang)-(.+)$")


def callout_type(node: Tag) -> str:
    """Alert type from a ``markdown-alert-<type>`` class, defaulting to NOTE."""
    for name in classes(node):
        if name.startswith(CALLOUT_CLASS + "-") and name != CALLOUT_TITLE_CLASS:
            return name[len(CALLOUT_CLASS) + 1 :].upper()
    return "NOTE"


def _matches_callout(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "div" and has_class(node, CALLOUT_CLASS)


def convert_callout(content: str, node: Tag, engine: ConversionEngine) -> str:
    body = content
    title = node.select_one("." + CALLOUT_TITLE_CLASS)
    if title is not None and title.get_text().strip():
        paragraph = node.select_one(f"p:not(.{CALLOUT_TITLE_CLASS})")
        if paragraph is not None:
            body = engine.convert_subtree(paragraph)
        else:
            body = content.replace(engine.convert_subtree(title), "", 1)

    body = body.strip().replace("\n", "\n> ")
    return f"\n> [!{callout_type(node)}]\n> {body}\n"


def code_language(code: Tag) -> str:
    language = attr(code, "data-lang")
    if language:
        return language
    for name in classes(code):
        match = _LANGUAGE_CLASS_RE.match(name)
        if match:
            return match.group(1)
    return ""


def _matches_code_block(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "pre" and node.find("code") is not None


def convert_code_block(content: str, node: Tag, engine: ConversionEngine) -> str:
    code = node.find("code")
    text = code.get_text().strip()

    if engine.options.code_block_style == "indented":
        indented = "\n".join("    " + line if line else line for line in text.split("\n"))
        return f"\n\n{indented}\n\n"

    text = text.replace("`", "\\`")
    return f"\n```{code_language(code)}\n{text}\n```\n"


CALLOUT_RULE = Rule("callout", _matches_callout, convert_callout)
CODE_BLOCK_RULE = Rule("preformattedCode", _matches_code_block, convert_code_block)
