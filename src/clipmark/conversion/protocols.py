"""Protocol definitions for content conversion."""

from typing import Protocol, Union

from ..models.results import ExtractResult


class ContentExtractor(Protocol):
    """
    Protocol for extracting main content from HTML.

    Implementations should extract the main article content with page
    metadata while removing navigation, headers, footers, ads, etc.
    """

    def extract(
        self,
        html: Union[str, bytes],
        url: str,
        include_full_html: bool = False,
        clean: bool = True,
    ) -> ExtractResult:
        """
        Extract main content from HTML.

        Args:
            html: Raw page HTML
            url: Source URL (for relative link resolution)
            include_full_html: Also return the full page HTML
            clean: Clean the full page HTML before returning it

        Returns:
            ExtractResult with the content fragment (still HTML) and metadata
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert cleaned HTML fragments to Markdown format.
    """

    def convert(self, html: str, options) -> str:  # type: ignore[no-untyped-def]
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content fragment
            options: Conversion options or the base URL

        Returns:
            Markdown string
        """
        ...
