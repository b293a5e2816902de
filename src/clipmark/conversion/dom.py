"""Small helpers over the BeautifulSoup tree used by the conversion rules."""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import PageElement

BLOCK_ELEMENTS = frozenset(
    {
        "address", "article", "aside", "audio", "blockquote", "body", "canvas",
        "center", "dd", "dir", "div", "dl", "dt", "fieldset", "figcaption",
        "figure", "footer", "form", "frameset", "h1", "h2", "h3", "h4", "h5",
        "h6", "header", "hgroup", "hr", "html", "isindex", "li", "main", "menu",
        "nav", "noframes", "noscript", "ol", "output", "p", "pre", "section",
        "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
        "keygen", "link", "meta", "param", "source", "track", "wbr",
    }
)

# Elements that carry meaning even without any text
MEANINGFUL_WHEN_BLANK = frozenset(
    {
        "a", "table", "thead", "tbody", "tfoot", "th", "td", "iframe", "script",
        "audio", "video", "math", "svg",
    }
)

LIST_ELEMENTS = frozenset({"ul", "ol"})

_DISPLAY_NONE_RE = re.compile(r"(?:^|;)\s*display\s*:\s*none\s*(?:!important\s*)?(?:;|$)", re.IGNORECASE)


def is_tag(node: Optional[PageElement], *names: str) -> bool:
    """True if ``node`` is an element, optionally with one of ``names``."""
    if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
        return False
    return not names or node.name in names


def is_block(node: Optional[PageElement]) -> bool:
    if isinstance(node, BeautifulSoup):
        return True
    return isinstance(node, Tag) and node.name in BLOCK_ELEMENTS


def classes(node: Tag) -> list[str]:
    value = node.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(node: Optional[PageElement], *names: str) -> bool:
    """True if the element carries any of the given classes."""
    if not is_tag(node):
        return False
    node_classes = classes(node)  # type: ignore[arg-type]
    return any(name in node_classes for name in names)


def attr(node: Tag, name: str) -> str:
    """Attribute value as a string ("" when absent)."""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def closest(node: PageElement, *names: str) -> Optional[Tag]:
    """Nearest ancestor (or the node itself) with one of ``names``."""
    current: Optional[PageElement] = node
    while current is not None and not isinstance(current, BeautifulSoup):
        if isinstance(current, Tag) and current.name in names:
            return current
        current = current.parent
    return None


def element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if is_tag(child)]


def is_hidden(node: Tag) -> bool:
    """True for elements hidden through an inline ``display: none`` style."""
    return bool(_DISPLAY_NONE_RE.search(attr(node, "style")))


def is_blank(node: Tag) -> bool:
    """
    True for elements that render nothing: no text, no media, no void
    descendants and not meaningful when empty.
    """
    if node.name in VOID_ELEMENTS or node.name in MEANINGFUL_WHEN_BLANK:
        return False
    if node.has_attr("data-latex"):
        return False
    if node.get_text().strip():
        return False
    for descendant in node.find_all(True):
        if descendant.name in VOID_ELEMENTS or descendant.name in MEANINGFUL_WHEN_BLANK:
            return False
    return True

