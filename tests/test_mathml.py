"""Tests for MathML to LaTeX translation."""

import pytest

from clipmark.conversion.mathml import MathConversionError, mathml_to_latex


def latex(body: str) -> str:
    return mathml_to_latex(f"<math>{body}</math>")


class TestLayout:
    """Tests for layout elements."""

    def test_fraction(self):
        assert latex("<mfrac><mi>a</mi><mi>b</mi></mfrac>") == r"\frac{a}{b}"

    def test_binomial(self):
        """Test fractions without a bar."""
        assert latex('<mfrac linethickness="0"><mi>n</mi><mi>k</mi></mfrac>') == r"\binom{n}{k}"

    def test_square_root(self):
        assert latex("<msqrt><mi>x</mi></msqrt>") == r"\sqrt{x}"

    def test_nth_root(self):
        assert latex("<mroot><mi>x</mi><mn>3</mn></mroot>") == r"\sqrt[3]{x}"

    def test_compound_base_is_braced(self):
        """Test that a multi-token base is grouped before a script."""
        body = "<msup><mrow><mi>x</mi><mo>+</mo><mn>1</mn></mrow><mn>2</mn></msup>"

        assert latex(body) == "{x+1}^{2}"

    def test_matrix(self):
        body = (
            "<mtable><mtr><mtd><mn>1</mn></mtd><mtd><mn>0</mn></mtd></mtr>"
            "<mtr><mtd><mn>0</mn></mtd><mtd><mn>1</mn></mtd></mtr></mtable>"
        )

        assert latex(body) == r"\begin{matrix}1 & 0 \\ 0 & 1\end{matrix}"

    def test_fenced(self):
        assert latex("<mfenced><mi>a</mi><mi>b</mi></mfenced>") == r"\left(a,b\right)"

    def test_whitespace_between_tokens_ignored(self):
        assert mathml_to_latex("<math>\n  <mi>x</mi>\n</math>") == "x"


class TestTokens:
    """Tests for identifiers, operators and text."""

    def test_greek_letter_spacing(self):
        """Test that a command is not fused with a following letter."""
        assert latex("<mi>α</mi><mi>x</mi>") == r"\alpha x"

    def test_function_names(self):
        """Test that invisible function application disappears."""
        assert latex("<mi>sin</mi><mo>⁡</mo><mi>x</mi>") == r"\sin x"

    def test_multi_letter_identifier(self):
        assert latex("<mi>speed</mi>") == r"\mathrm{speed}"

    def test_text(self):
        assert latex("<mtext>if</mtext>") == r"\text{if}"

    def test_operators(self):
        assert latex("<mi>a</mi><mo>≤</mo><mi>b</mi>") == r"a\leq b"


class TestScripts:
    """Tests for limits and accents."""

    def test_integral_limits(self):
        body = "<msubsup><mo>∫</mo><mn>0</mn><mn>1</mn></msubsup>"

        assert latex(body) == r"\int_{0}^{1}"

    def test_sum_limits(self):
        body = (
            "<munderover><mo>∑</mo><mrow><mi>i</mi><mo>=</mo><mn>1</mn></mrow>"
            "<mi>n</mi></munderover>"
        )

        assert latex(body) == r"\sum_{i=1}^{n}"

    def test_accent(self):
        assert latex("<mover><mi>x</mi><mo>^</mo></mover>") == r"\hat{x}"

    def test_annotation_ignored_in_semantics(self):
        """Test that semantics converts its presentation child only."""
        body = (
            "<semantics><mi>y</mi>"
            '<annotation encoding="application/x-tex">ignored</annotation></semantics>'
        )

        assert latex(body) == "y"


class TestErrors:
    """Tests for untranslatable markup."""

    def test_unknown_element(self):
        with pytest.raises(MathConversionError, match="Unsupported"):
            latex("<mfoo><mi>x</mi></mfoo>")

    def test_wrong_arity(self):
        with pytest.raises(MathConversionError, match="expects 2 children"):
            latex("<mfrac><mi>a</mi></mfrac>")

    def test_no_math_element(self):
        with pytest.raises(MathConversionError):
            mathml_to_latex("<p>no math here</p>")
