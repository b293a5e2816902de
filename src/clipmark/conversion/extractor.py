"""Main content extraction from HTML pages."""

import logging
import re
import time
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

from ..models.config import ExtractorConfig
from ..models.results import ExtractResult
from .metadata import PageMetadataExtractor, extract_meta_tags, extract_schema_org
from .urls import resolve_tree

logger = logging.getLogger(__name__)

# Elements that typically contain main content
CONTENT_SELECTORS = [
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".main-content",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".markdown-body",
    "#content",
    "#main-content",
]

# Elements to remove (navigation, ads, etc.)
REMOVE_SELECTORS = [
    "nav",
    "header",
    "footer",
    "aside",
    ".nav",
    ".navbar",
    ".sidebar",
    ".menu",
    ".toc",
    ".table-of-contents",
    ".advertisement",
    ".ads",
    ".social-share",
    ".comments",
    ".related-posts",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    "script",
    "style",
    "noscript",
    "template",
    "form",
]

_WORD_RE = re.compile(r"\w+", re.UNICODE)


def count_words(text: str) -> int:
    return len(_WORD_RE.findall(text))


def decode_html(html: Union[str, bytes]) -> str:
    """Decode raw HTML bytes using the charset declared in the page."""
    if isinstance(html, str):
        return html

    head = html[:2048].decode("latin-1", errors="ignore")
    charset_match = re.search(r'charset=["\']?([^"\'\s>;]+)', head, re.IGNORECASE)
    encoding = charset_match.group(1).strip() if charset_match else "utf-8"
    try:
        return html.decode(encoding, errors="replace")
    except LookupError:
        logger.debug(f"Unknown charset {encoding!r}, decoding as utf-8")
        return html.decode("utf-8", errors="replace")


def clean_html(html: str, base_url: Optional[str] = None) -> str:
    """
    Strip scripts, styles and inline ``style`` attributes from a page.

    Args:
        html: Full page HTML
        base_url: When given, relative URLs are made absolute against it

    Returns:
        The cleaned page HTML
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.find_all(["script", "style"]):
        element.decompose()

    for element in soup.find_all(style=True):
        del element["style"]

    if base_url:
        resolve_tree(soup, base_url)

    return str(soup)


class MainContentExtractor:
    """
    Extracts main content and page metadata from HTML documents.

    Uses selector heuristics to find the main content area and removes
    navigation, ads, and other non-content elements. Attributes are kept
    as-is since the converter relies on them (math sources, code
    languages, task-list checkboxes).

    Example:
        extractor = MainContentExtractor()
        result = extractor.extract(html_bytes, "https://blog.example.com/post")
        result.content, result.metadata.title
    """

    def __init__(
        self,
        content_selectors: Optional[list[str]] = None,
        remove_selectors: Optional[list[str]] = None,
        min_text_length: int = 100,
    ):
        """
        Initialize the content extractor.

        Args:
            content_selectors: CSS selectors for main content (overrides defaults)
            remove_selectors: CSS selectors for elements to remove (extends defaults)
            min_text_length: Minimum text length for a selector match to be used
        """
        self._content_selectors = content_selectors or CONTENT_SELECTORS
        self._remove_selectors = list(REMOVE_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)
        self._min_text_length = min_text_length
        self._metadata = PageMetadataExtractor()

    @classmethod
    def from_config(cls, config: ExtractorConfig) -> "MainContentExtractor":
        return cls(
            content_selectors=config.content_selectors,
            remove_selectors=config.remove_selectors,
            min_text_length=config.min_text_length,
        )

    def _find_main_content(self, soup: BeautifulSoup) -> Tag:
        """Find the main content element using selectors."""
        for selector in self._content_selectors:
            element = soup.select_one(selector)
            if element and len(element.get_text(strip=True)) >= self._min_text_length:
                logger.debug(f"Main content matched selector {selector!r}")
                return element

        body = soup.find("body")
        if isinstance(body, Tag):
            return body

        # Fragment without <body>: use the whole document
        return soup

    def _remove_unwanted(self, element: Tag) -> None:
        """Remove navigation, ads, and other unwanted elements."""
        for selector in self._remove_selectors:
            for el in element.select(selector):
                el.decompose()

    def extract(
        self,
        html: Union[str, bytes],
        url: str,
        include_full_html: bool = False,
        clean: bool = True,
    ) -> ExtractResult:
        """
        Extract main content and metadata from HTML.

        Args:
            html: Raw page HTML (bytes are decoded using the declared charset)
            url: Source URL for resolving relative links
            include_full_html: Also return the full page HTML
            clean: Clean the full page HTML (see ``clean_html``)

        Returns:
            ExtractResult with the content fragment and page metadata
        """
        start = time.perf_counter()

        text = decode_html(html)
        soup = BeautifulSoup(text, "html.parser")

        meta_tags = extract_meta_tags(soup)
        schema_org_data = extract_schema_org(soup)

        main_content = self._find_main_content(soup)

        # Work on a copy so the full document stays intact
        content = BeautifulSoup(
            main_content.decode_contents() if main_content is soup else str(main_content),
            "html.parser",
        )
        self._remove_unwanted(content)
        resolve_tree(content, url)

        metadata = self._metadata.extract(
            soup,
            url,
            meta_tags,
            schema_org_data,
            word_count=count_words(content.get_text(" ")),
        )

        full_html = None
        if include_full_html:
            full_html = clean_html(text, url) if clean else text

        parse_time = (time.perf_counter() - start) * 1000
        logger.debug(f"Extracted {metadata.word_count} words from {url} in {parse_time:.1f}ms")

        return ExtractResult(
            content=str(content).strip(),
            metadata=metadata,
            schema_org_data=schema_org_data,
            meta_tags=meta_tags,
            full_html=full_html,
            parse_time=parse_time,
        )
