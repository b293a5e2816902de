"""Presentation MathML to LaTeX translation."""

from __future__ import annotations

import re
from typing import Callable, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString


class MathConversionError(ValueError):
    """Raised when MathML markup cannot be translated to LaTeX."""


GREEK = {
    "α": r"\alpha", "β": r"\beta", "γ": r"\gamma", "δ": r"\delta", "ε": r"\varepsilon",
    "ϵ": r"\epsilon", "ζ": r"\zeta", "η": r"\eta", "θ": r"\theta", "ϑ": r"\vartheta",
    "ι": r"\iota", "κ": r"\kappa", "λ": r"\lambda", "μ": r"\mu", "ν": r"\nu", "ξ": r"\xi",
    "π": r"\pi", "ϖ": r"\varpi", "ρ": r"\rho", "ϱ": r"\varrho", "σ": r"\sigma",
    "ς": r"\varsigma", "τ": r"\tau", "υ": r"\upsilon", "φ": r"\varphi", "ϕ": r"\phi",
    "χ": r"\chi", "ψ": r"\psi", "ω": r"\omega", "Γ": r"\Gamma", "Δ": r"\Delta",
    "Θ": r"\Theta", "Λ": r"\Lambda", "Ξ": r"\Xi", "Π": r"\Pi", "Σ": r"\Sigma",
    "Υ": r"\Upsilon", "Φ": r"\Phi", "Ψ": r"\Psi", "Ω": r"\Omega",
}

SYMBOLS = {
    "±": r"\pm", "∓": r"\mp", "×": r"\times", "÷": r"\div", "⋅": r"\cdot", "·": r"\cdot",
    "∗": "*", "−": "-", "≤": r"\leq", "≥": r"\geq", "≠": r"\neq", "≈": r"\approx",
    "≡": r"\equiv", "∼": r"\sim", "≃": r"\simeq", "≅": r"\cong", "∝": r"\propto",
    "≪": r"\ll", "≫": r"\gg", "∞": r"\infty", "∂": r"\partial", "∇": r"\nabla",
    "∑": r"\sum", "∏": r"\prod", "∐": r"\coprod", "∫": r"\int", "∬": r"\iint",
    "∭": r"\iiint", "∮": r"\oint", "⋃": r"\bigcup", "⋂": r"\bigcap", "∈": r"\in",
    "∉": r"\notin", "∋": r"\ni", "⊂": r"\subset", "⊆": r"\subseteq", "⊃": r"\supset",
    "⊇": r"\supseteq", "∪": r"\cup", "∩": r"\cap", "∅": r"\emptyset", "∀": r"\forall",
    "∃": r"\exists", "¬": r"\neg", "∧": r"\wedge", "∨": r"\vee", "→": r"\rightarrow",
    "←": r"\leftarrow", "↔": r"\leftrightarrow", "⇒": r"\Rightarrow", "⇐": r"\Leftarrow",
    "⇔": r"\Leftrightarrow", "↦": r"\mapsto", "↑": r"\uparrow", "↓": r"\downarrow",
    "…": r"\ldots", "⋯": r"\cdots", "⋮": r"\vdots", "⋱": r"\ddots", "′": "'", "″": "''",
    "∘": r"\circ", "⊕": r"\oplus", "⊗": r"\otimes", "⊥": r"\perp", "∥": r"\parallel",
    "⟨": r"\langle", "⟩": r"\rangle", "‖": r"\|", "∣": "|", "ℝ": r"\mathbb{R}",
    "ℕ": r"\mathbb{N}", "ℤ": r"\mathbb{Z}", "ℚ": r"\mathbb{Q}", "ℂ": r"\mathbb{C}",
    "ℏ": r"\hbar", "ℓ": r"\ell", "°": r"^\circ", "{": r"\{", "}": r"\}", "%": r"\%",
    "#": r"\#", "&": r"\&", "$": r"\$", "⌊": r"\lfloor", "⌋": r"\rfloor",
    "⌈": r"\lceil", "⌉": r"\rceil",
    # Invisible operators (function application, times, separator, plus)
    "⁡": "", "⁢": "", "⁣": "", "⁤": "",
}

FUNCTIONS = {
    "sin", "cos", "tan", "cot", "sec", "csc", "arcsin", "arccos", "arctan", "sinh",
    "cosh", "tanh", "coth", "log", "ln", "lg", "exp", "lim", "liminf", "limsup", "max",
    "min", "sup", "inf", "det", "dim", "gcd", "deg", "arg", "ker", "hom", "Pr",
}

# Operators that take limits above/below rather than accents
LARGE_OPERATORS = {
    r"\sum", r"\prod", r"\coprod", r"\int", r"\iint", r"\iiint", r"\oint", r"\bigcup",
    r"\bigcap", r"\lim", r"\liminf", r"\limsup", r"\max", r"\min", r"\sup", r"\inf",
}

OVER_ACCENTS = {
    "^": r"\hat", "ˆ": r"\hat", "~": r"\tilde", "˜": r"\tilde", "¯": r"\overline",
    "‾": r"\overline", "―": r"\overline", "_": r"\overline", "→": r"\vec", "⃗": r"\vec",
    "˙": r"\dot", "¨": r"\ddot", "⏞": r"\overbrace", "︷": r"\overbrace",
}

UNDER_ACCENTS = {
    "_": r"\underline", "¯": r"\underline", "‾": r"\underline", "⏟": r"\underbrace",
    "︸": r"\underbrace",
}

TRANSPARENT = {"math", "mrow", "mstyle", "mpadded", "merror", "menclose", "maction", "mtd"}

_TRAILING_COMMAND_RE = re.compile(r"\\[A-Za-z]+$")
_SIMPLE_BASE_RE = re.compile(r"^(?:.|\\[A-Za-z]+|\\[A-Za-z]+\{.*\}|\\left.*\\right.)$", re.DOTALL)


def mathml_to_latex(math: Union[Tag, str]) -> str:
    """
    Translate a presentation MathML element (or markup string) to LaTeX.

    Raises:
        MathConversionError: If the markup has no math element or uses
            elements/arities this translator does not understand
    """
    if isinstance(math, str):
        soup = BeautifulSoup(math, "html.parser")
        found = soup.find("math")
        if not isinstance(found, Tag):
            raise MathConversionError("No <math> element found")
        math = found

    return re.sub(r"\s+", " ", _convert(math)).strip()


def _children(node: Tag) -> list[Union[Tag, str]]:
    items: list[Union[Tag, str]] = []
    for child in node.children:
        if isinstance(child, Tag):
            items.append(child)
        elif type(child) is NavigableString and child.strip():
            items.append(child.strip())
    return items


def _element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def _concat(parts: list[str]) -> str:
    result = ""
    for part in parts:
        if not part:
            continue
        # Keep "\alpha x" from fusing into an unknown "\alphax" command
        if _TRAILING_COMMAND_RE.search(result) and part[0].isalpha():
            result += " "
        result += part
    return result


def _convert_all(node: Tag) -> str:
    parts = []
    for child in _children(node):
        parts.append(_convert(child) if isinstance(child, Tag) else _translate_text(child))
    return _concat(parts)


def _group(latex: str) -> str:
    return "{" + latex + "}"


def _base(latex: str) -> str:
    """Brace a sub/superscript base unless it is a single token."""
    if not latex or _SIMPLE_BASE_RE.match(latex):
        return latex
    return _group(latex)


def _expect(node: Tag, count: int) -> list[Tag]:
    children = _element_children(node)
    if len(children) != count:
        raise MathConversionError(
            f"<{node.name}> expects {count} children, found {len(children)}"
        )
    return children


def _translate_text(text: str) -> str:
    return "".join(SYMBOLS.get(ch, GREEK.get(ch, ch)) for ch in text)


def _text_of(node: Tag) -> str:
    return node.get_text().strip()


def _mi(node: Tag) -> str:
    text = _text_of(node)
    if text in FUNCTIONS:
        return "\\" + text
    if len(text) > 1 and not all(ch in GREEK for ch in text):
        return r"\mathrm{" + text + "}"
    latex = _translate_text(text)
    variant = node.get("mathvariant")
    if variant == "bold":
        return r"\mathbf{" + latex + "}"
    if variant == "double-struck":
        return r"\mathbb{" + latex + "}"
    if variant == "normal" and len(text) == 1 and text.isalpha():
        return r"\mathrm{" + latex + "}"
    return latex


def _mo(node: Tag) -> str:
    text = _text_of(node)
    if text in FUNCTIONS:
        return "\\" + text
    return _translate_text(text)


def _mtext(node: Tag) -> str:
    text = node.get_text()
    if not text.strip():
        return r"\ "
    escaped = text.replace("\\", r"\textbackslash ").replace("{", r"\{").replace("}", r"\}")
    return r"\text{" + escaped + "}"


def _mfrac(node: Tag) -> str:
    numerator, denominator = _expect(node, 2)
    if node.get("linethickness") in ("0", "0px", "0pt"):
        return r"\binom" + _group(_convert(numerator)) + _group(_convert(denominator))
    return r"\frac" + _group(_convert(numerator)) + _group(_convert(denominator))


def _msqrt(node: Tag) -> str:
    return r"\sqrt" + _group(_convert_all(node))


def _mroot(node: Tag) -> str:
    base, index = _expect(node, 2)
    return r"\sqrt[" + _convert(index) + "]" + _group(_convert(base))


def _msup(node: Tag) -> str:
    base, sup = _expect(node, 2)
    return _base(_convert(base)) + "^" + _group(_convert(sup))


def _msub(node: Tag) -> str:
    base, sub = _expect(node, 2)
    return _base(_convert(base)) + "_" + _group(_convert(sub))


def _msubsup(node: Tag) -> str:
    base, sub, sup = _expect(node, 3)
    return _base(_convert(base)) + "_" + _group(_convert(sub)) + "^" + _group(_convert(sup))


def _munder(node: Tag) -> str:
    base, under = _expect(node, 2)
    base_latex = _convert(base)
    under_text = _text_of(under)
    if under.name == "mo" and under_text in UNDER_ACCENTS:
        return UNDER_ACCENTS[under_text] + _group(base_latex)
    if base_latex in LARGE_OPERATORS:
        return base_latex + "_" + _group(_convert(under))
    return r"\underset" + _group(_convert(under)) + _group(base_latex)


def _mover(node: Tag) -> str:
    base, over = _expect(node, 2)
    base_latex = _convert(base)
    over_text = _text_of(over)
    if over.name == "mo" and over_text in OVER_ACCENTS:
        return OVER_ACCENTS[over_text] + _group(base_latex)
    if base_latex in LARGE_OPERATORS:
        return base_latex + "^" + _group(_convert(over))
    return r"\overset" + _group(_convert(over)) + _group(base_latex)


def _munderover(node: Tag) -> str:
    base, under, over = _expect(node, 3)
    base_latex = _convert(base)
    if base_latex not in LARGE_OPERATORS:
        return r"\overset" + _group(_convert(over)) + _group(
            r"\underset" + _group(_convert(under)) + _group(base_latex)
        )
    return base_latex + "_" + _group(_convert(under)) + "^" + _group(_convert(over))


def _mtable(node: Tag) -> str:
    rows = []
    for row in _element_children(node):
        if row.name not in ("mtr", "mlabeledtr"):
            raise MathConversionError(f"Unexpected <{row.name}> inside <mtable>")
        cells = _element_children(row)
        if row.name == "mlabeledtr":
            cells = cells[1:]
        rows.append(" & ".join(_convert(cell) for cell in cells))
    return r"\begin{matrix}" + r" \\ ".join(rows) + r"\end{matrix}"


def _fence(value: str) -> str:
    if not value:
        return "."
    return SYMBOLS.get(value, value)


def _mfenced(node: Tag) -> str:
    opening = _fence(str(node.get("open", "(")))
    closing = _fence(str(node.get("close", ")")))
    separators = str(node.get("separators", ",")).split() or [","]
    separators = [sep for group in separators for sep in group] or [","]
    parts = []
    for index, child in enumerate(_element_children(node)):
        if index:
            parts.append(separators[min(index - 1, len(separators) - 1)])
        parts.append(_convert(child))
    return r"\left" + opening + _concat(parts) + r"\right" + closing


def _mmultiscripts(node: Tag) -> str:
    children = _element_children(node)
    if not children:
        raise MathConversionError("<mmultiscripts> without a base")
    base = _base(_convert(children[0]))
    post: list[str] = []
    pre: list[str] = []
    target = post
    for child in children[1:]:
        if child.name == "mprescripts":
            target = pre
            continue
        target.append("" if child.name == "none" else _convert(child))

    def scripts(items: list[str]) -> str:
        latex = ""
        for sub, sup in zip(items[0::2], items[1::2]):
            if sub:
                latex += "_" + _group(sub)
            if sup:
                latex += "^" + _group(sup)
        return latex

    prefix = "{}" + scripts(pre) if pre else ""
    return prefix + base + scripts(post)


def _semantics(node: Tag) -> str:
    for child in _element_children(node):
        if child.name not in ("annotation", "annotation-xml"):
            return _convert(child)
    return ""


def _mphantom(node: Tag) -> str:
    return r"\phantom" + _group(_convert_all(node))


def _ms(node: Tag) -> str:
    return r'\text{"' + node.get_text() + r'"}'


HANDLERS: dict[str, Callable[[Tag], str]] = {
    "mi": _mi,
    "mn": lambda node: _text_of(node),
    "mo": _mo,
    "mtext": _mtext,
    "ms": _ms,
    "mspace": lambda node: " ",
    "mfrac": _mfrac,
    "msqrt": _msqrt,
    "mroot": _mroot,
    "msup": _msup,
    "msub": _msub,
    "msubsup": _msubsup,
    "munder": _munder,
    "mover": _mover,
    "munderover": _munderover,
    "mtable": _mtable,
    "mfenced": _mfenced,
    "mmultiscripts": _mmultiscripts,
    "semantics": _semantics,
    "mphantom": _mphantom,
    "none": lambda node: "",
    "annotation": lambda node: "",
    "annotation-xml": lambda node: "",
}


def _convert(node: Tag) -> str:
    if node.name in TRANSPARENT:
        return _convert_all(node)
    handler = HANDLERS.get(node.name)
    if handler is None:
        raise MathConversionError(f"Unsupported MathML element <{node.name}>")
    return handler(node)
