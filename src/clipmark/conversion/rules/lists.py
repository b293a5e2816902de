"""List and list-item rules, including task lists and ordered numbering."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from bs4 import Tag

from ..dom import LIST_ELEMENTS, element_children, has_class, is_tag
from .base import Rule

if TYPE_CHECKING:
    from ..engine import ConversionEngine

_INPUT_MARKUP_RE = re.compile(r"<input[^>]*>")


def is_footnote_list(node: Tag) -> bool:
    """True for the ordered list holding a document's footnote definitions."""
    if node.name != "ol":
        return False
    if has_class(node, "footnotes-list", "references"):
        return True
    parent = node.parent
    return is_tag(parent) and (parent.get("id") == "footnotes" or has_class(parent, "footnotes"))


def list_depth(item: Tag) -> int:
    """Number of list elements directly enclosing ``item`` (ul > ul > li is 2)."""
    level = 0
    parent = item.parent
    while is_tag(parent, *LIST_ELEMENTS):
        level += 1
        parent = parent.parent
    return level


def ordered_start(list_node: Tag) -> Optional[int]:
    value = list_node.get("start")
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def item_number(item: Tag, list_node: Tag) -> int:
    """
    Rendered number of an ordered item.

    Position counts every element child of the list, so items that render
    empty still consume their number.
    """
    # bs4 compares tags structurally, so look the item up by identity
    index = next(i for i, child in enumerate(element_children(list_node)) if child is item)
    start = ordered_start(list_node)
    return (start if start is not None else 1) + index


def _matches_list(node: Tag, engine: ConversionEngine) -> bool:
    return node.name in LIST_ELEMENTS and not is_footnote_list(node)


def convert_list(content: str, node: Tag, engine: ConversionEngine) -> str:
    content = content.strip()
    is_top_level = not is_tag(node.parent, *LIST_ELEMENTS)
    return ("\n" if is_top_level else "") + content + "\n"


def _task_marker(item: Tag) -> Optional[str]:
    if not has_class(item, "task-list-item"):
        return None
    checkbox = item.select_one('input[type="checkbox"]')
    if checkbox is None:
        return None
    return "[x] " if checkbox.has_attr("checked") else "[ ] "


def convert_list_item(content: str, node: Tag, engine: ConversionEngine) -> str:
    task_marker = _task_marker(node)
    if task_marker is not None:
        content = _INPUT_MARKUP_RE.sub("", content, count=1)
    else:
        task_marker = ""

    # Continuation lines (including nested lists) move one tab deeper
    lines = [line for line in content.rstrip("\n").split("\n") if line]
    content = "\n\t".join(lines)

    level = list_depth(node)
    indent = "\t" * max(0, level - 1)
    parent = node.parent
    if is_tag(parent, "ol"):
        prefix = f"{indent}{item_number(node, parent)}. "
    else:
        prefix = f"{indent}{engine.options.bullet_list_marker} "

    suffix = "\n" if node.next_sibling is not None else ""
    return prefix + task_marker + content.strip() + suffix


LIST_RULE = Rule("list", _matches_list, convert_list)
LIST_ITEM_RULE = Rule("listItem", lambda node, engine: node.name == "li", convert_list_item)
