"""Tests for configuration models and result rendering."""

import pytest
from pydantic import ValidationError

from clipmark.conversion import FrontmatterBuilder
from clipmark.models import (
    ClipmarkConfig,
    ClipOptions,
    ClipResult,
    ConversionOptions,
    MarkdownStyle,
    PageMetadata,
)


class TestConversionOptions:
    """Tests for ConversionOptions."""

    def test_defaults(self):
        options = ConversionOptions(base_url="https://example.com/")

        assert options.heading_style == "atx"
        assert options.bullet_list_marker == "-"
        assert options.code_block_style == "fenced"
        assert options.em_delimiter == "*"
        assert options.hr == "---"

    def test_camel_case_keys(self):
        options = ConversionOptions.model_validate(
            {"baseUrl": "https://example.com/", "bulletListMarker": "*", "codeBlockStyle": "indented"}
        )

        assert options.base_url == "https://example.com/"
        assert options.bullet_list_marker == "*"
        assert options.code_block_style == "indented"

    def test_base_url_must_be_absolute(self):
        with pytest.raises(ValidationError, match="absolute URL"):
            ConversionOptions(base_url="/docs/page")

    def test_invalid_style_values(self):
        with pytest.raises(ValidationError):
            ConversionOptions(base_url="https://example.com/", heading_style="underline")
        with pytest.raises(ValidationError):
            ConversionOptions(base_url="https://example.com/", hr="")

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            ConversionOptions(base_url="https://example.com/", linkStyle="referenced")

    def test_frozen(self):
        options = ConversionOptions(base_url="https://example.com/")

        with pytest.raises(ValidationError):
            options.hr = "***"

    def test_style_part(self):
        options = ConversionOptions(base_url="https://example.com/", em_delimiter="_")

        assert options.style() == MarkdownStyle(em_delimiter="_")


class TestClipOptions:
    """Tests for ClipOptions."""

    def test_conversion_options(self):
        options = ClipOptions(url="https://example.com/post", heading_style="setext", include_full_html=True)

        conversion = options.conversion_options()

        assert conversion.base_url == "https://example.com/post"
        assert conversion.heading_style == "setext"

    def test_camel_case_flags(self):
        options = ClipOptions.model_validate(
            {"url": "https://example.com/", "includeFullHtml": True, "cleanHtml": False}
        )

        assert options.include_full_html is True
        assert options.clean_html is False


class TestClipmarkConfig:
    """Tests for the root configuration."""

    def test_defaults(self):
        config = ClipmarkConfig()

        assert config.style == MarkdownStyle()
        assert config.frontmatter is False
        assert config.log_level == "WARNING"

    def test_yaml_round_trip(self):
        pytest.importorskip("yaml")
        config = ClipmarkConfig(style=MarkdownStyle(bullet_list_marker="*"), frontmatter=True)

        assert ClipmarkConfig.from_yaml(config.to_yaml()) == config

    def test_from_yaml_file(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "clipmark.yaml"
        path.write_text("style:\n  heading_style: setext\nextractor:\n  min_text_length: 10\n")

        config = ClipmarkConfig.from_yaml_file(path)

        assert config.style.heading_style == "setext"
        assert config.extractor.min_text_length == 10

    def test_empty_yaml(self):
        pytest.importorskip("yaml")

        assert ClipmarkConfig.from_yaml("") == ClipmarkConfig()

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            ClipmarkConfig.model_validate({"output_dir": "docs"})


class TestFrontmatter:
    """Tests for frontmatter and document rendering."""

    def test_build(self):
        frontmatter = FrontmatterBuilder().build(
            title='Say "hi"',
            url="https://example.com/post",
            description="d" * 600,
            tags=["a", "b"],
            empty="",
            missing=None,
        )

        assert frontmatter == (
            "---\n"
            'title: "Say \\"hi\\""\n'
            "source: https://example.com/post\n"
            f'description: "{"d" * 500}"\n'
            "tags:\n"
            "  - a\n"
            "  - b\n"
            "---\n\n"
        )

    def test_build_from_metadata(self):
        metadata = PageMetadata(title="T", url="https://example.com/", author="Ann", word_count=12)

        frontmatter = FrontmatterBuilder().build_from_metadata(metadata)

        assert 'author: "Ann"' in frontmatter
        assert "word_count: 12" in frontmatter
        assert "site:" not in frontmatter

    def test_to_document(self):
        result = ClipResult(
            markdown="Body",
            html="<p>Body</p>",
            metadata=PageMetadata(title="T", url="https://example.com/"),
            suggested_filename="T",
        )

        assert result.to_document(frontmatter=False) == "Body\n"
        assert result.to_document().startswith('---\ntitle: "T"\nsource: https://example.com/\n---\n\nBody')
