"""Rule type shared by the rule catalog and the conversion engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from bs4 import Tag

if TYPE_CHECKING:
    from ..engine import ConversionEngine

Matcher = Callable[[Tag, "ConversionEngine"], bool]
Replacement = Callable[[str, Tag, "ConversionEngine"], str]


@dataclass(frozen=True)
class Rule:
    """
    A single conversion rule.

    Attributes:
        name: Identifier used in logs and tests
        matches: Predicate deciding whether the rule applies to an element
        convert: Builds the Markdown for the element from its already
            converted child content
    """

    name: str
    matches: Matcher
    convert: Replacement


def tag_filter(*names: str) -> Matcher:
    """Matcher for elements with one of the given tag names."""

    def matches(node: Tag, engine: ConversionEngine) -> bool:
        return node.name in names

    return matches


def wrap_inline(content: str, opening: str, closing: str | None = None) -> str:
    """
    Wrap inline content in delimiters, keeping flanking whitespace outside.

    Returns "" for whitespace-only content so empty marks vanish.
    """
    stripped = content.strip()
    if not stripped:
        return ""
    closing = opening if closing is None else closing
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()) :]
    return f"{leading}{opening}{stripped}{closing}{trailing}"
