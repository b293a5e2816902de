"""Tests for Markdown post-processing."""

from clipmark.conversion.postprocess import (
    collapse_blank_lines,
    post_process,
    remove_empty_links,
    remove_leading_title,
)


class TestPostProcess:
    """Tests for the string-level cleanup passes."""

    def test_leading_title_removed(self):
        assert remove_leading_title("# Title\n\nBody") == "Body"

    def test_only_first_title_removed(self):
        """Test that later level-one headings are kept."""
        markdown = "# One\n\nText\n\n# Two"

        assert remove_leading_title(markdown) == "Text\n\n# Two"

    def test_title_not_at_start_kept(self):
        assert remove_leading_title("Intro\n\n# Title") == "Intro\n\n# Title"

    def test_subheading_kept(self):
        assert remove_leading_title("## Sub\n\nBody") == "## Sub\n\nBody"

    def test_empty_links_removed(self):
        assert remove_empty_links("See [](https://x.com/a) here") == "See  here"

    def test_empty_image_alt_kept(self):
        """Test that images without alt text survive."""
        assert remove_empty_links("![](https://x.com/a.png)") == "![](https://x.com/a.png)"

    def test_empty_link_keeps_surrounding_lines(self):
        assert remove_empty_links("a\n[](x)\nb") == "a\n\nb"

    def test_blank_lines_collapsed(self):
        assert collapse_blank_lines("a\n\n\n\nb\n\n\nc") == "a\n\nb\n\nc"

    def test_pipeline(self):
        markdown = "# Title\n\nText [](#)\n\n\n\nMore"

        assert post_process(markdown) == "Text \n\nMore"
