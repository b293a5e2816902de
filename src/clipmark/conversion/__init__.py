"""Content conversion for clipmark (extraction, HTML to Markdown, frontmatter)."""

from .engine import MAX_NESTING_DEPTH, ConversionEngine
from .extractor import MainContentExtractor, clean_html
from .markdown import FrontmatterBuilder, HtmlToMarkdown
from .mathml import MathConversionError, mathml_to_latex
from .postprocess import post_process
from .protocols import ContentExtractor, MarkdownConverter
from .urls import get_domain, resolve_url, resolve_urls

__all__ = [
    # Protocols
    "ContentExtractor",
    "MarkdownConverter",
    # Implementations
    "MainContentExtractor",
    "HtmlToMarkdown",
    "FrontmatterBuilder",
    "ConversionEngine",
    "MAX_NESTING_DEPTH",
    # Helpers
    "clean_html",
    "get_domain",
    "mathml_to_latex",
    "MathConversionError",
    "post_process",
    "resolve_url",
    "resolve_urls",
]
