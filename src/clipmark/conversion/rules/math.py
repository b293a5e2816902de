"""Math rules for MathJax, raw MathML and KaTeX markup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from bs4 import Tag

from ..dom import attr, has_class
from ..mathml import MathConversionError, mathml_to_latex
from .base import Rule
from .tables import in_table_cell

if TYPE_CHECKING:
    from ..engine import ConversionEngine

logger = logging.getLogger(__name__)

MATHML_CLASSES = ("mwe-math-element", "mwe-math-fallback-image-inline", "mwe-math-fallback-image-display")
KATEX_CLASSES = ("katex", "math")
KATEX_INLINE_CLASSES = ("math-inline", "inline")
KATEX_DISPLAY_CLASSES = ("display", "math-display", "katex-display")

TEX_ANNOTATION = 'annotation[encoding="application/x-tex"]'

LatexExtractor = Callable[[Tag], Optional[str]]


@dataclass(frozen=True)
class MathEntity:
    """LaTeX source of one math element and whether it renders as a block."""

    latex: str
    is_block: bool


def first_latex(node: Tag, extractors: Sequence[LatexExtractor]) -> Optional[str]:
    """Run ``extractors`` in order and return the first non-empty result."""
    for extractor in extractors:
        latex = extractor(node)
        if latex and latex.strip():
            return latex.strip()
    return None


def render_math(entity: MathEntity, inline_padding: str = "") -> str:
    if entity.is_block:
        return f"\n$$\n{entity.latex}\n$$\n"
    return f"{inline_padding}${entity.latex}${inline_padding}"


def _math_element(node: Tag) -> Optional[Tag]:
    if node.name == "math":
        return node
    found = node.find("math")
    return found if isinstance(found, Tag) else None


# MathJax

def _assistive_math(node: Tag) -> Optional[Tag]:
    found = node.select_one("mjx-assistive-mml math")
    return found if isinstance(found, Tag) else None


def _matches_mathjax(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "mjx-container" and _assistive_math(node) is not None


def _mathjax_latex(node: Tag) -> Optional[str]:
    math = _assistive_math(node)
    return mathml_to_latex(math) if math is not None else None


MATHJAX_EXTRACTORS: tuple[LatexExtractor, ...] = (_mathjax_latex,)


def convert_mathjax(content: str, node: Tag, engine: ConversionEngine) -> str:
    try:
        latex = first_latex(node, MATHJAX_EXTRACTORS)
    except MathConversionError as e:
        logger.warning(f"Could not convert MathJax markup: {e}")
        return content
    if latex is None:
        return content

    math = _assistive_math(node)
    is_block = (math is not None and attr(math, "display") == "block") or attr(node, "display") == "true"
    return render_math(MathEntity(latex, is_block and not in_table_cell(node)))


# MathML

def _matches_mathml(node: Tag, engine: ConversionEngine) -> bool:
    return node.name == "math" or has_class(node, *MATHML_CLASSES)


def _data_latex(node: Tag) -> Optional[str]:
    return attr(node, "data-latex") or None


def _alttext(node: Tag) -> Optional[str]:
    return attr(node, "alttext") or None


def _nested_alttext(node: Tag) -> Optional[str]:
    nested = node.select_one("math[alttext]")
    return attr(nested, "alttext") if nested is not None else None


def _tex_annotation(node: Tag) -> Optional[str]:
    annotation = node.select_one(TEX_ANNOTATION)
    return annotation.get_text() if annotation is not None else None


def _converted_mathml(node: Tag) -> Optional[str]:
    math = _math_element(node)
    return mathml_to_latex(math) if math is not None else None


def _image_alt(node: Tag) -> Optional[str]:
    img = node if node.name == "img" else node.find("img")
    return attr(img, "alt") if isinstance(img, Tag) else None


MATHML_EXTRACTORS: tuple[LatexExtractor, ...] = (
    _data_latex,
    _alttext,
    _nested_alttext,
    _tex_annotation,
    _converted_mathml,
    _image_alt,
)


def _mathml_is_block(node: Tag) -> bool:
    if has_class(node, "mwe-math-fallback-image-display"):
        return True
    math = _math_element(node)
    return math is not None and attr(math, "display") == "block"


def convert_mathml(content: str, node: Tag, engine: ConversionEngine) -> str:
    try:
        latex = first_latex(node, MATHML_EXTRACTORS)
    except MathConversionError as e:
        logger.warning(f"Could not convert MathML markup: {e}")
        return content
    if latex is None:
        return content

    entity = MathEntity(latex, _mathml_is_block(node) and not in_table_cell(node))
    return render_math(entity, inline_padding=" ")


# KaTeX

def _matches_katex(node: Tag, engine: ConversionEngine) -> bool:
    return has_class(node, *KATEX_CLASSES)


def _visible_text(node: Tag) -> Optional[str]:
    return node.get_text()


KATEX_EXTRACTORS: tuple[LatexExtractor, ...] = (_data_latex, _tex_annotation, _visible_text)


def _katex_is_block(node: Tag) -> bool:
    if has_class(node, *KATEX_INLINE_CLASSES):
        return False
    if has_class(node, *KATEX_DISPLAY_CLASSES):
        return True
    math = node.select_one(".katex-mathml math")
    return math is not None and attr(math, "display") == "block"


def convert_katex(content: str, node: Tag, engine: ConversionEngine) -> str:
    latex = first_latex(node, KATEX_EXTRACTORS)
    if latex is None:
        return content
    return render_math(MathEntity(latex, _katex_is_block(node) and not in_table_cell(node)))


MATHJAX_RULE = Rule("MathJax", _matches_mathjax, convert_mathjax)
MATHML_RULE = Rule("math", _matches_mathml, convert_mathml)
KATEX_RULE = Rule("katex", _matches_katex, convert_katex)
