"""Table rule: pipe tables for simple tables, sanitized HTML for spanning ones."""

from __future__ import annotations

import copy
import re
from typing import TYPE_CHECKING

from bs4 import Tag

from ..dom import element_children, is_tag
from .base import Rule, tag_filter

if TYPE_CHECKING:
    from ..engine import ConversionEngine

ALLOWED_TABLE_ATTRIBUTES = frozenset(
    {
        "src", "href", "style", "align", "width", "height", "rowspan", "colspan",
        "bgcolor", "scope", "valign", "headers",
    }
)

SECTION_TAGS = ("thead", "tbody", "tfoot")
CELL_TAGS = ("td", "th")

_NEWLINES_RE = re.compile(r"\n+")


def is_complex_table(table: Tag) -> bool:
    """True when any cell spans rows or columns."""
    return any(
        cell.has_attr("colspan") or cell.has_attr("rowspan")
        for cell in table.find_all(CELL_TAGS)
    )


def table_rows(table: Tag) -> list[Tag]:
    """Rows of ``table`` in document order, excluding rows of nested tables."""
    rows = []
    for child in element_children(table):
        if child.name == "tr":
            rows.append(child)
        elif child.name in SECTION_TAGS:
            rows.extend(row for row in element_children(child) if row.name == "tr")
    return rows


def row_cells(row: Tag) -> list[Tag]:
    return [cell for cell in element_children(row) if cell.name in CELL_TAGS]


def clean_table_html(table: Tag) -> str:
    """Serialize a copy of ``table`` keeping only layout-relevant attributes."""
    clone = copy.copy(table)
    for element in [clone, *clone.find_all(True)]:
        for name in list(element.attrs):
            if name not in ALLOWED_TABLE_ATTRIBUTES:
                del element[name]
    return str(clone)


def convert_cell(cell: Tag, engine: ConversionEngine) -> str:
    text = _NEWLINES_RE.sub(" ", engine.convert_subtree(cell)).strip()
    return text.replace("|", "\\|")


def convert_table(content: str, node: Tag, engine: ConversionEngine) -> str:
    if is_complex_table(node):
        return "\n\n" + clean_table_html(node) + "\n\n"

    rows = [[convert_cell(cell, engine) for cell in row_cells(row)] for row in table_rows(node)]
    if not rows:
        return content

    lines = [f"| {' | '.join(cells)} |" for cells in rows]
    # Ragged tables keep the first row's width
    separator = f"| {' | '.join(['---'] * len(rows[0]))} |"

    return "\n\n" + "\n".join([lines[0], separator, *lines[1:]]) + "\n\n"


TABLE_RULE = Rule("table", tag_filter("table"), convert_table)


def in_table_cell(node: Tag) -> bool:
    """True if ``node`` sits inside a table cell."""
    parent = node.parent
    while parent is not None:
        if is_tag(parent, *CELL_TAGS):
            return True
        parent = parent.parent
    return False
