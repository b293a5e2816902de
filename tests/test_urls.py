"""Tests for URL resolution."""

import logging

from bs4 import BeautifulSoup

from clipmark.conversion.urls import (
    get_domain,
    make_url_absolute,
    parse_srcset,
    resolve_srcset,
    resolve_url,
    resolve_urls,
)

BASE = "https://example.com/blog/post"


class TestResolveUrl:
    """Tests for single URL references."""

    def test_relative_path(self):
        """Test that paths resolve against the base directory."""
        assert resolve_url("img/a.png", BASE) == "https://example.com/blog/img/a.png"

    def test_root_relative(self):
        assert resolve_url("/a.png", BASE) == "https://example.com/a.png"

    def test_parent_directory(self):
        """Test ../ segments."""
        assert resolve_url("../a.png", BASE) == "https://example.com/a.png"

    def test_base_with_trailing_slash(self):
        """Test that a directory base keeps its last segment."""
        assert resolve_url("a.png", "https://example.com/docs/") == "https://example.com/docs/a.png"

    def test_untouched_references(self):
        """Test references that are already usable."""
        for value in (
            "https://other.org/x",
            "http://other.org/x",
            "data:image/png;base64,AAAA",
            "#section",
            "//cdn.example.org/x.js",
            "mailto:me@example.com",
        ):
            assert resolve_url(value, BASE) == value

    def test_foreign_scheme_with_host(self):
        """Test that browser-local schemes pointing at a host get the page scheme."""
        result = resolve_url("moz-extension://cdn.example.org/lib.js", BASE)

        assert result == "https://cdn.example.org/lib.js"

    def test_extension_local_resource(self):
        """Test that extension resources are re-rooted at the page."""
        result = resolve_url("chrome-extension://abcdef/img/x.png", BASE)

        assert result == "https://example.com/blog/img/x.png"


class TestSrcset:
    """Tests for srcset handling."""

    def test_parse_with_descriptors(self):
        assert parse_srcset("a.png 1x, b.png 2x") == [("a.png", "1x"), ("b.png", "2x")]

    def test_parse_without_spaces_after_comma(self):
        """Test candidates separated by a bare comma after the URL."""
        assert parse_srcset("a.png, b.png 2x") == [("a.png", ""), ("b.png", "2x")]

    def test_data_uri_commas_survive(self):
        """Test that commas inside a data URI are not separators."""
        result = parse_srcset("data:image/png;base64,AAA= 1x, b.png 2x")

        assert result[0] == ("data:image/png;base64,AAA=", "1x")
        assert result[1] == ("b.png", "2x")

    def test_resolve_srcset(self):
        result = resolve_srcset("small.png 480w, /large.png 1080w", BASE)

        assert result == "https://example.com/blog/small.png 480w, https://example.com/large.png 1080w"


class TestGetDomain:
    """Tests for domain extraction."""

    def test_subdomain_stripped(self):
        assert get_domain("https://blog.example.com/post") == "example.com"

    def test_second_level_country_domain(self):
        assert get_domain("https://www.example.co.uk/") == "example.co.uk"

    def test_localhost_and_ip(self):
        assert get_domain("http://localhost:3000/") == "localhost"
        assert get_domain("http://192.168.1.10/page") == "192.168.1.10"

    def test_invalid_url(self, caplog):
        """Test that unparseable URLs give an empty domain."""
        with caplog.at_level(logging.WARNING, logger="clipmark"):
            assert get_domain("not a url") == ""

        assert "Invalid URL" in caplog.text


class TestTreeRewriting:
    """Tests for in-place attribute rewriting."""

    def test_resolve_urls_fragment(self):
        """Test href, src and srcset rewriting on a fragment."""
        html = '<a href="next">n</a><img src="i.png" srcset="i2.png 2x">'

        result = resolve_urls(html, BASE)

        assert 'href="https://example.com/blog/next"' in result
        assert 'src="https://example.com/blog/i.png"' in result
        assert 'srcset="https://example.com/blog/i2.png 2x"' in result

    def test_invalid_base_leaves_attribute(self, caplog):
        """Test that resolution failures are logged and skipped."""
        soup = BeautifulSoup('<a href="page">x</a>', "html.parser")
        link = soup.a

        with caplog.at_level(logging.WARNING, logger="clipmark"):
            make_url_absolute(link, "href", "http://[bad")

        assert link["href"] == "page"
        assert "Failed to process href URL" in caplog.text
