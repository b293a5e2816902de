"""Rule-driven, post-order HTML to Markdown tree walk."""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from bs4 import Tag
from bs4.element import NavigableString, PageElement, PreformattedString

from ..models.config import MarkdownStyle
from .dom import closest, is_blank, is_block, is_tag
from .rules import Rule, build_rule_catalog

logger = logging.getLogger(__name__)

# Deeper subtrees are flattened to their text
MAX_NESTING_DEPTH = 128

_WHITESPACE_RE = re.compile(r"[ \t\r\n\f]+")
_LEADING_NEWLINES_RE = re.compile(r"^\n+")
_TRAILING_NEWLINES_RE = re.compile(r"\n+$")

# (pattern, replacement) pairs applied in order to text outside code
ESCAPES = (
    (re.compile(r"\\"), r"\\\\"),
    (re.compile(r"\*"), r"\\*"),
    (re.compile(r"\A-"), r"\\-"),
    (re.compile(r"\A\+ "), r"\\+ "),
    (re.compile(r"\A(=+)"), r"\\\1"),
    (re.compile(r"\A(#{1,6}) "), r"\\\1 "),
    (re.compile(r"`"), r"\\`"),
    (re.compile(r"\A~~~"), r"\\~~~"),
    (re.compile(r"\["), r"\\["),
    (re.compile(r"\]"), r"\\]"),
    (re.compile(r"\A>"), r"\\>"),
    (re.compile(r"_"), r"\\_"),
    (re.compile(r"\A(\d+)\. "), r"\1\\. "),
)


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that would otherwise read as Markdown syntax."""
    for pattern, replacement in ESCAPES:
        text = pattern.sub(replacement, text)
    return text


def join(output: str, replacement: str) -> str:
    """
    Append ``replacement`` to ``output``, merging the newlines at the seam
    so that at most one blank line separates the two.
    """
    left = _TRAILING_NEWLINES_RE.sub("", output)
    right = _LEADING_NEWLINES_RE.sub("", replacement)
    newlines = max(len(output) - len(left), len(replacement) - len(right))
    return left + "\n\n"[:newlines] + right


def _is_break(node: Optional[PageElement]) -> bool:
    return is_block(node) or is_tag(node, "br")


class ConversionEngine:
    """
    Converts a BeautifulSoup tree to Markdown using an ordered rule catalog.

    Each node is converted after its children; the first rule whose
    predicate matches receives the joined child output and returns the
    node's Markdown. Rules may call ``convert_subtree`` or
    ``convert_contents`` to convert a part of the tree on their own (table
    cells, captions, footnote bodies).

    An engine holds per-call state, so create one per conversion:

        engine = ConversionEngine(MarkdownStyle(heading_style="setext"))
        markdown = engine.convert(soup)
    """

    def __init__(self, options: MarkdownStyle, rules: Optional[Sequence[Rule]] = None):
        self.options = options
        self.rules: tuple[Rule, ...] = tuple(rules) if rules is not None else build_rule_catalog()
        self._depth = 0
        self._depth_warned = False
        # True when the last emitted text ended in (or at) a line or word break
        self._after_space = True

    def convert(self, root: Tag) -> str:
        """Convert the children of ``root`` and trim the result."""
        self._after_space = True
        output = self.convert_children(root)
        return output.lstrip("\t\r\n").rstrip()

    def convert_subtree(self, node: Tag) -> str:
        """Convert ``node`` itself (its rule applies) and trim the result."""
        saved = self._after_space
        self._after_space = True
        try:
            return self.convert_node(node).strip()
        finally:
            self._after_space = saved

    def convert_contents(self, node: Tag) -> str:
        """Convert only the children of ``node`` and trim the result."""
        saved = self._after_space
        self._after_space = True
        try:
            return self.convert_children(node).strip()
        finally:
            self._after_space = saved

    def convert_children(self, node: Tag) -> str:
        output = ""
        for child in node.children:
            if isinstance(child, Tag):
                replacement = self.convert_node(child)
            elif isinstance(child, PreformattedString):
                # Comments, CDATA, doctypes and processing instructions
                continue
            elif isinstance(child, NavigableString):
                replacement = self.convert_text(child)
            else:
                continue
            output = join(output, replacement)
        return output

    def convert_node(self, node: Tag) -> str:
        if self._depth >= MAX_NESTING_DEPTH:
            if not self._depth_warned:
                logger.warning(
                    f"Markup nested deeper than {MAX_NESTING_DEPTH} levels; flattening to text"
                )
                self._depth_warned = True
            return escape_markdown(_WHITESPACE_RE.sub(" ", node.get_text()))

        block = is_block(node)
        if block:
            self._after_space = True

        if is_blank(node):
            if block:
                return "\n\n"
            if not self._after_space and _WHITESPACE_RE.search(node.get_text()):
                self._after_space = True
                return " "
            return ""

        self._depth += 1
        try:
            content = self.convert_children(node)
        finally:
            self._depth -= 1

        rule = self.rule_for(node)
        if block or rule.name == "keep" or closest(node, "pre") is not None:
            replacement = rule.convert(content, node, self)
        else:
            replacement = self._with_flanking_whitespace(content, node, rule)

        if block or node.name == "br":
            self._after_space = True
        elif replacement:
            self._after_space = replacement[-1].isspace()
        return replacement

    def rule_for(self, node: Tag) -> Rule:
        for rule in self.rules:
            if rule.matches(node, self):
                return rule
        raise LookupError(f"No rule matches <{node.name}>")

    def _with_flanking_whitespace(self, content: str, node: Tag, rule: Rule) -> str:
        """Keep leading/trailing whitespace of inline content outside the markup."""
        stripped = content.strip()
        if not stripped:
            return rule.convert(content, node, self)
        leading = content[: len(content) - len(content.lstrip())]
        trailing = content[len(content.rstrip()) :]
        return leading + rule.convert(stripped, node, self) + trailing

    def convert_text(self, text: NavigableString) -> str:
        parent = text.parent
        if parent is not None and closest(parent, "pre") is not None:
            self._after_space = False
            return str(text)

        value = _WHITESPACE_RE.sub(" ", str(text))

        previous, following = text.previous_sibling, text.next_sibling
        if self._after_space or (previous is None and is_block(parent)) or _is_break(previous):
            value = value.lstrip(" ")
        if (following is None and is_block(parent)) or _is_break(following):
            value = value.rstrip(" ")

        if not value:
            return ""
        self._after_space = value.endswith(" ")

        if parent is not None and closest(parent, "code") is not None:
            return value
        return escape_markdown(value)
