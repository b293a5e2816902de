"""Shared fixtures for clipmark tests."""

import logging

import pytest

from clipmark.conversion import HtmlToMarkdown

BASE_URL = "https://example.com/blog/post"


@pytest.fixture(autouse=True)
def reset_clipmark_logger():
    """Undo setup_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger("clipmark")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def converter():
    return HtmlToMarkdown()


@pytest.fixture
def convert(converter):
    """Convert a fragment against BASE_URL, with optional style overrides."""

    def _convert(html, **style):
        return converter.convert(html, {"base_url": BASE_URL, **style})

    return _convert


ARTICLE_URL = "https://blog.example.com/posts/one"

ARTICLE_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Page Title | Example Blog</title>
<meta name="description" content="A short description">
<meta name="author" content="Meta Author">
<meta property="og:site_name" content="Example Blog">
<meta property="og:image" content="/cover.png">
<link rel="icon" href="/favicon.ico">
<script type="application/ld+json">
{"@context": "https://schema.org", "@graph": [
  {"@type": "WebSite", "name": "Example Blog"},
  {"@type": "Article", "headline": "Structured Headline", "datePublished": "2024-01-02",
   "author": {"@type": "Person", "name": "Jane Doe"}}
]}
</script>
</head>
<body>
<nav><a href="/">Home</a> <a href="/about">About</a></nav>
<article>
<h1>Structured Headline</h1>
<p>Café culture is a long tradition. This paragraph is long enough to count as the
main content of the page, well past the minimum text length.</p>
<p><img src="diagram.png" alt="Diagram"></p>
<div class="comments">Nice post!</div>
</article>
<footer>Copyright</footer>
</body>
</html>
"""


@pytest.fixture
def article_page():
    return ARTICLE_PAGE
