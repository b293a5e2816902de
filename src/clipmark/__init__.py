"""
clipmark - Clip web pages and HTML fragments to clean Markdown.

Usage:
    from clipmark import clip, convert_to_markdown

    markdown = convert_to_markdown(html_fragment, {"baseUrl": "https://example.com/post"})

    result = clip(page_html, url="https://example.com/post")
    print(result.suggested_filename, result.metadata.title)
    print(result.markdown)
"""

__version__ = "1.0.0"

from .clipper import Clipper, clip, convert_to_markdown, create_clipper, extract
from .conversion import FrontmatterBuilder, HtmlToMarkdown, MainContentExtractor
from .models import (
    ClipmarkConfig,
    ClipOptions,
    ClipResult,
    ConversionOptions,
    ExtractorConfig,
    ExtractResult,
    MarkdownStyle,
    MetaTag,
    PageMetadata,
)
from .naming import sanitize_filename

__all__ = [
    "__version__",
    # Facade
    "Clipper",
    "create_clipper",
    "clip",
    "extract",
    "convert_to_markdown",
    # Components
    "HtmlToMarkdown",
    "MainContentExtractor",
    "FrontmatterBuilder",
    "sanitize_filename",
    # Config
    "ClipmarkConfig",
    "ClipOptions",
    "ConversionOptions",
    "ExtractorConfig",
    "MarkdownStyle",
    # Results
    "ClipResult",
    "ExtractResult",
    "MetaTag",
    "PageMetadata",
]
