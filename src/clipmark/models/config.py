"""Pydantic configuration models for clipmark."""

from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

HeadingStyle = Literal["atx", "setext"]
BulletListMarker = Literal["-", "+", "*"]
CodeBlockStyle = Literal["fenced", "indented"]
EmDelimiter = Literal["*", "_"]


class MarkdownStyle(BaseModel):
    """Output style of the generated Markdown."""

    heading_style: HeadingStyle = Field(
        "atx",
        alias="headingStyle",
        description="'atx' (# Heading) or 'setext' (underlined h1/h2)",
    )
    bullet_list_marker: BulletListMarker = Field(
        "-",
        alias="bulletListMarker",
        description="Marker used for unordered list items",
    )
    code_block_style: CodeBlockStyle = Field(
        "fenced",
        alias="codeBlockStyle",
        description="'fenced' (```) or 'indented' (four spaces) code blocks",
    )
    em_delimiter: EmDelimiter = Field(
        "*",
        alias="emDelimiter",
        description="Delimiter wrapped around emphasized text",
    )
    hr: str = Field("---", min_length=1, description="Horizontal rule token")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ConversionOptions(MarkdownStyle):
    """
    Options for a single HTML to Markdown conversion.

    Accepts both snake_case field names and the camelCase keys used by
    browser-side callers:

        ConversionOptions(base_url="https://example.com/post")
        ConversionOptions.model_validate({"baseUrl": "https://example.com", "headingStyle": "setext"})
    """

    base_url: str = Field(
        ...,
        alias="baseUrl",
        description="Absolute URL of the page the fragment came from",
    )

    @field_validator("base_url")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute URL, got {value!r}")
        return value

    def style(self) -> MarkdownStyle:
        """Return only the style part of these options."""
        return MarkdownStyle(**self.model_dump(exclude={"base_url"}))


class ClipOptions(MarkdownStyle):
    """Options for the combined extract-then-convert operation."""

    url: str = Field(..., description="URL of the clipped page")
    filename: Optional[str] = Field(
        None,
        description="Explicit filename (without extension) overriding the page title",
    )
    include_full_html: bool = Field(
        False,
        alias="includeFullHtml",
        description="Also return the full page HTML",
    )
    clean_html: bool = Field(
        True,
        alias="cleanHtml",
        description="Strip scripts, styles and style attributes from the full page HTML",
    )

    def conversion_options(self) -> ConversionOptions:
        """Build the conversion options for this clip."""
        style = self.model_dump(
            exclude={"url", "filename", "include_full_html", "clean_html"},
        )
        return ConversionOptions(base_url=self.url, **style)


class ExtractorConfig(BaseModel):
    """Configuration for main-content extraction."""

    content_selectors: Optional[list[str]] = Field(
        None,
        description="CSS selectors tried in order to locate the main content (overrides defaults)",
    )
    remove_selectors: list[str] = Field(
        default_factory=list,
        description="Extra CSS selectors removed from the content (extends defaults)",
    )
    min_text_length: int = Field(
        100,
        ge=0,
        description="Minimum text length for a selector match to count as main content",
    )

    model_config = ConfigDict(extra="forbid")


class ClipmarkConfig(BaseModel):
    """
    Root configuration model for clipmark.

    Example:
        config = ClipmarkConfig(style={"heading_style": "setext"}, frontmatter=True)

    YAML format:
        style:
          bullet_list_marker: "*"
          code_block_style: indented
        extractor:
          min_text_length: 50
        frontmatter: true
        log_level: DEBUG
    """

    style: MarkdownStyle = Field(default_factory=MarkdownStyle)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    frontmatter: bool = Field(False, description="Prepend YAML frontmatter built from page metadata")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = ConfigDict(extra="forbid")

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClipmarkConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClipmarkConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
