"""Extract-then-convert facade and module-level convenience functions."""

import logging
from typing import Any, Optional, Union

from .conversion.extractor import MainContentExtractor
from .conversion.markdown import HtmlToMarkdown, OptionsLike
from .conversion.protocols import ContentExtractor, MarkdownConverter
from .models.config import ClipOptions
from .models.results import ClipResult, ExtractResult
from .naming import sanitize_filename

logger = logging.getLogger(__name__)


class Clipper:
    """
    Clips web pages to Markdown.

    Combines a content extractor and a Markdown converter; either can be
    swapped for any object implementing the corresponding protocol.

    Example:
        clipper = Clipper()
        result = clipper.clip(html, ClipOptions(url="https://example.com/post"))
        Path(result.suggested_filename + ".md").write_text(result.markdown)
    """

    def __init__(
        self,
        extractor: Optional[ContentExtractor] = None,
        converter: Optional[MarkdownConverter] = None,
    ):
        self.extractor: ContentExtractor = extractor or MainContentExtractor()
        self.converter: MarkdownConverter = converter or HtmlToMarkdown()

    def extract(
        self,
        html: Union[str, bytes],
        url: str,
        include_full_html: bool = False,
        clean: bool = True,
    ) -> ExtractResult:
        """Extract the main content fragment and page metadata."""
        return self.extractor.extract(html, url, include_full_html=include_full_html, clean=clean)

    def convert(self, html: str, options: OptionsLike) -> str:
        """Convert an HTML fragment to Markdown."""
        return self.converter.convert(html, options)

    def clip(
        self,
        html: Union[str, bytes],
        options: Optional[ClipOptions] = None,
        **option_values: Any,
    ) -> ClipResult:
        """
        Extract the main content of a page and convert it to Markdown.

        Args:
            html: Raw page HTML
            options: Clip options; alternatively pass them as keyword
                arguments (``url=...``, ``heading_style=...``)

        Returns:
            ClipResult with Markdown, content HTML, metadata and a
            sanitized suggested filename
        """
        if options is None:
            options = ClipOptions.model_validate(option_values)

        extracted = self.extract(
            html,
            options.url,
            include_full_html=options.include_full_html,
            clean=options.clean_html,
        )

        markdown = self.convert(extracted.content, options.conversion_options())

        suggested_filename = sanitize_filename(options.filename or extracted.metadata.title)
        logger.info(f"Clipped {options.url} ({extracted.metadata.word_count} words)")

        return ClipResult(
            markdown=markdown,
            html=extracted.content,
            metadata=extracted.metadata,
            suggested_filename=suggested_filename,
            schema_org_data=extracted.schema_org_data,
            meta_tags=extracted.meta_tags,
        )


def create_clipper(
    extractor: Optional[ContentExtractor] = None,
    converter: Optional[MarkdownConverter] = None,
) -> Clipper:
    return Clipper(extractor, converter)


_default_clipper: Optional[Clipper] = None


def get_default_clipper() -> Clipper:
    """Shared clipper used by the module-level functions, created on first use."""
    global _default_clipper
    if _default_clipper is None:
        _default_clipper = create_clipper()
    return _default_clipper


def clip(html: Union[str, bytes], options: Optional[ClipOptions] = None, **option_values: Any) -> ClipResult:
    return get_default_clipper().clip(html, options, **option_values)


def extract(
    html: Union[str, bytes],
    url: str,
    include_full_html: bool = False,
    clean: bool = True,
) -> ExtractResult:
    return get_default_clipper().extract(html, url, include_full_html=include_full_html, clean=clean)


def convert_to_markdown(html: str, options: OptionsLike) -> str:
    """Convert an HTML fragment to Markdown with the default clipper."""
    return get_default_clipper().convert(html, options)
