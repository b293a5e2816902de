"""
Rule catalog for HTML to Markdown conversion.

Rules are evaluated in order and the first match wins, so the position of
a rule in ``build_rule_catalog()`` is part of its behavior.
"""

from .base import Rule, tag_filter, wrap_inline
from .blocks import CALLOUT_RULE, CODE_BLOCK_RULE
from .footnotes import CITATION_RULE, FOOTNOTE_LIST_RULE
from .generic import DEFAULT_RULE, GENERIC_RULES
from .lists import LIST_ITEM_RULE, LIST_RULE
from .math import KATEX_RULE, MATHJAX_RULE, MATHML_RULE, MathEntity
from .media import EMBED_RULE, FIGURE_RULE, HIGHLIGHT_RULE, STRIKETHROUGH_RULE
from .removals import BACKREF_RULE, HIDDEN_RULE
from .tables import TABLE_RULE


def build_rule_catalog() -> tuple[Rule, ...]:
    """Return the ordered rule tuple; ``DEFAULT_RULE`` is always last."""
    return (
        TABLE_RULE,
        LIST_RULE,
        LIST_ITEM_RULE,
        FIGURE_RULE,
        EMBED_RULE,
        HIGHLIGHT_RULE,
        STRIKETHROUGH_RULE,
        MATHJAX_RULE,
        MATHML_RULE,
        KATEX_RULE,
        CALLOUT_RULE,
        CODE_BLOCK_RULE,
        CITATION_RULE,
        FOOTNOTE_LIST_RULE,
        BACKREF_RULE,
        HIDDEN_RULE,
        *GENERIC_RULES,
        DEFAULT_RULE,
    )


__all__ = [
    "Rule",
    "MathEntity",
    "build_rule_catalog",
    "tag_filter",
    "wrap_inline",
]
