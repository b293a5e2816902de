"""Tests for the extract-then-convert facade."""

import clipmark
from clipmark import Clipper, ClipOptions, convert_to_markdown
from clipmark.models import ConversionOptions

ARTICLE_URL = "https://blog.example.com/posts/one"


class RecordingConverter:
    """Converter stub that records the options it receives."""

    def __init__(self):
        self.calls = []

    def convert(self, html, options):
        self.calls.append((html, options))
        return "converted"


class TestClipper:
    """Tests for Clipper.clip."""

    def test_clip_with_keyword_options(self, article_page):
        result = Clipper().clip(article_page, url=ARTICLE_URL)

        assert result.markdown.startswith("Café culture is a long tradition.")
        assert "![Diagram](https://blog.example.com/posts/diagram.png)" in result.markdown

    def test_leading_title_removed(self, article_page):
        """Test that the article heading is carried as metadata only."""
        result = Clipper().clip(article_page, url=ARTICLE_URL)

        assert "# Structured Headline" not in result.markdown
        assert result.metadata.title == "Structured Headline"

    def test_suggested_filename_from_title(self, article_page):
        result = Clipper().clip(article_page, url=ARTICLE_URL)

        assert result.suggested_filename == "Structured Headline"

    def test_filename_override(self, article_page):
        options = ClipOptions(url=ARTICLE_URL, filename="My Note")

        assert Clipper().clip(article_page, options).suggested_filename == "My Note"

    def test_style_options_applied(self, article_page):
        """Test that style fields of the clip options reach the converter."""
        converter = RecordingConverter()
        clipper = Clipper(converter=converter)

        result = clipper.clip(article_page, url=ARTICLE_URL, heading_style="setext")

        html, options = converter.calls[0]
        assert result.markdown == "converted"
        assert result.html == html
        assert isinstance(options, ConversionOptions)
        assert options.base_url == ARTICLE_URL
        assert options.heading_style == "setext"

    def test_result_carries_page_data(self, article_page):
        result = Clipper().clip(article_page, url=ARTICLE_URL)

        assert result.schema_org_data
        assert result.meta_tags
        assert result.metadata.domain == "example.com"


class TestModuleFunctions:
    """Tests for the module-level convenience functions."""

    def test_convert_to_markdown(self):
        result = convert_to_markdown("<p>Read <a href='more'>more</a></p>", {"baseUrl": ARTICLE_URL})

        assert result == "Read [more](https://blog.example.com/posts/more)"

    def test_clip(self, article_page):
        result = clipmark.clip(article_page, url=ARTICLE_URL)

        assert result.metadata.author == "Jane Doe"

    def test_extract(self, article_page):
        result = clipmark.extract(article_page, ARTICLE_URL, include_full_html=True)

        assert result.full_html is not None
        assert "Café culture" in result.content

    def test_create_clipper(self):
        converter = RecordingConverter()

        clipper = clipmark.create_clipper(converter=converter)

        assert clipper.convert("<p>x</p>", {"baseUrl": ARTICLE_URL}) == "converted"
