"""Clipmark configuration and result models."""

from .config import (
    ClipmarkConfig,
    ClipOptions,
    ConversionOptions,
    ExtractorConfig,
    MarkdownStyle,
)
from .results import ClipResult, ExtractResult, MetaTag, PageMetadata

__all__ = [
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
