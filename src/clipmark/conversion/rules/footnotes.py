"""Citation markers and footnote definition lists."""

from __future__ import annotations

import copy
import re
from typing import TYPE_CHECKING

from bs4 import Tag

from ..dom import attr, element_children
from .base import Rule
from .lists import is_footnote_list

if TYPE_CHECKING:
    from ..engine import ConversionEngine

CITATION_PREFIX = "fnref:"
FOOTNOTE_PREFIX = "fn:"

_CITE_NOTE_RE = re.compile(r"cite_note-(.+)")
_BACKREF_TAIL_RE = re.compile(r"\s*↩︎?$")


def _matches_citation(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "sup" and attr(node, "id").startswith(CITATION_PREFIX)


def convert_citation(content: str, node: Tag, engine: ConversionEngine) -> str:
    reference = attr(node, "id")[len(CITATION_PREFIX) :]
    return f"[^{reference.split('-')[0]}]"


def footnote_id(item: Tag, position: int) -> str:
    """
    Identifier of a footnote definition.

    ``fn:3`` gives ``3``; Wikipedia-style ``cite_note-Smith-2`` gives
    ``Smith-2``; otherwise the raw id, or the 1-based position when the
    item has no id at all.
    """
    item_id = attr(item, "id")
    if item_id.startswith(FOOTNOTE_PREFIX):
        return item_id[len(FOOTNOTE_PREFIX) :]
    match = _CITE_NOTE_RE.search(item_id.split("/")[-1])
    if match:
        return match.group(1)
    return item_id or str(position)


def convert_footnote(item: Tag, position: int, engine: ConversionEngine) -> str:
    ident = footnote_id(item, position)

    body = copy.copy(item)
    marker = body.find("sup")
    if marker is not None and marker.get_text().strip() == ident:
        marker.decompose()

    text = _BACKREF_TAIL_RE.sub("", engine.convert_contents(body)).strip()
    return f"[^{ident.lower()}]: {text}"


def _matches_footnote_list(node: Tag, engine: ConversionEngine) -> bool:
    return is_footnote_list(node)


def convert_footnote_list(content: str, node: Tag, engine: ConversionEngine) -> str:
    items = [child for child in element_children(node) if child.name == "li"]
    definitions = [convert_footnote(item, index + 1, engine) for index, item in enumerate(items)]
    return "\n\n" + "\n\n".join(definitions) + "\n\n"


CITATION_RULE = Rule("citations", _matches_citation, convert_citation)
FOOTNOTE_LIST_RULE = Rule("footnotesList", _matches_footnote_list, convert_footnote_list)
