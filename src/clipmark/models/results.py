"""Result types returned by extraction and clipping."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class PageMetadata:
    """Metadata describing a clipped page.

    Passed through to callers unmodified; only the content fragment is
    converted to Markdown.
    """

    title: str = ""
    author: str = ""
    description: str = ""
    site: str = ""
    domain: str = ""
    url: str = ""
    favicon: str = ""
    image: str = ""
    published: str = ""
    word_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MetaTag:
    """A single ``<meta>`` tag from the page head."""

    content: Optional[str]
    name: Optional[str] = None
    property: Optional[str] = None


@dataclass
class ExtractResult:
    """
    Result of main-content extraction.

    Attributes:
        content: Main content HTML fragment
        metadata: Page metadata
        schema_org_data: JSON-LD objects found on the page (None if absent)
        meta_tags: All meta tags from the page
        full_html: Full page HTML, only when requested
        parse_time: Time taken to parse, in milliseconds
    """

    content: str
    metadata: PageMetadata
    schema_org_data: Optional[list[dict[str, Any]]] = None
    meta_tags: list[MetaTag] = field(default_factory=list)
    full_html: Optional[str] = None
    parse_time: float = 0.0


@dataclass
class ClipResult:
    """Complete result of an extract-then-convert clip."""

    markdown: str
    html: str
    metadata: PageMetadata
    suggested_filename: str
    schema_org_data: Optional[list[dict[str, Any]]] = None
    meta_tags: list[MetaTag] = field(default_factory=list)

    def to_document(self, frontmatter: bool = True) -> str:
        """Render the clip as a Markdown document, optionally with YAML frontmatter."""
        if not frontmatter:
            return self.markdown + "\n"

        from ..conversion.markdown import FrontmatterBuilder

        return FrontmatterBuilder().build_from_metadata(self.metadata) + self.markdown + "\n"
