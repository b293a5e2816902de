"""Rules that drop footnote back-references and hidden elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import Tag

from ..dom import attr, has_class, is_hidden
from .base import Rule

if TYPE_CHECKING:
    from ..engine import ConversionEngine


def _matches_backref(node: Tag, engine: ConversionEngine) -> bool:
    return "#fnref" in attr(node, "href") or has_class(node, "footnote-backref")


def _matches_hidden(node: Tag, engine: ConversionEngine) -> bool:
    return is_hidden(node)


def remove(content: str, node: Tag, engine: ConversionEngine) -> str:
    return ""


BACKREF_RULE = Rule("removals", _matches_backref, remove)
HIDDEN_RULE = Rule("removeHiddenElements", _matches_hidden, remove)
