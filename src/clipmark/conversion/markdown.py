"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from bs4 import BeautifulSoup

from ..models.config import ConversionOptions, MarkdownStyle
from ..models.results import PageMetadata
from .engine import ConversionEngine
from .postprocess import post_process
from .rules import Rule
from .urls import resolve_tree

logger = logging.getLogger(__name__)

PARTIAL_RESULT_PREFIX = "Partial conversion completed with errors. Original HTML:\n\n"

OptionsLike = Union[ConversionOptions, Mapping[str, Any], str]


class HtmlToMarkdown:
    """
    Converts HTML content fragments to Markdown.

    URLs are made absolute against the base URL before conversion, the rule
    catalog is applied bottom-up, and the result is cleaned up (duplicate
    title, empty links, extra blank lines).

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://docs.example.com/page")
        markdown = converter.convert(html_string, {"baseUrl": url, "headingStyle": "setext"})
    """

    def __init__(
        self,
        style: Optional[MarkdownStyle] = None,
        rules: Optional[Sequence[Rule]] = None,
    ):
        """
        Initialize the Markdown converter.

        Args:
            style: Default output style, used when ``convert`` is given only a URL
            rules: Replacement rule catalog (defaults to the built-in catalog)
        """
        self.style = style or MarkdownStyle()
        self._rules = tuple(rules) if rules is not None else None

    def options_for(self, options: OptionsLike) -> ConversionOptions:
        """
        Normalize ``options`` to ``ConversionOptions``.

        Raises:
            pydantic.ValidationError: For unknown style values or a base URL
                without scheme and host
        """
        if isinstance(options, ConversionOptions):
            return options
        if isinstance(options, str):
            return ConversionOptions(base_url=options, **self.style.model_dump())
        aliases = {
            field.alias: name
            for name, field in ConversionOptions.model_fields.items()
            if field.alias
        }
        values = self.style.model_dump()
        values.update({aliases.get(key, key): value for key, value in options.items()})
        return ConversionOptions.model_validate(values)

    def convert(self, html: str, options: OptionsLike) -> str:
        """
        Convert an HTML fragment to Markdown.

        Args:
            html: HTML content fragment
            options: ConversionOptions, a mapping of option values
                (camelCase keys accepted) or just the base URL

        Returns:
            Markdown string. If conversion fails part-way, a marked partial
            result embedding the URL-resolved HTML is returned instead.
        """
        options = self.options_for(options)

        soup = BeautifulSoup(html, "html.parser")
        resolve_tree(soup, options.base_url)

        try:
            engine = ConversionEngine(options, self._rules)
            markdown = engine.convert(soup)
            markdown = post_process(markdown)
            logger.debug(f"Converted {len(html)} chars of HTML to {len(markdown)} chars of Markdown")
            return markdown.lstrip("\r\n").rstrip()

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e}")
            return PARTIAL_RESULT_PREFIX + str(soup)


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for clipped Markdown documents.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(
            title="Getting Started",
            url="https://docs.example.com/getting-started",
            description="How to get started with our product",
        )
    """

    def build(
        self,
        title: str | None = None,
        url: str | None = None,
        description: str | None = None,
        **extra_fields: Any,
    ) -> str:
        """
        Build YAML frontmatter string.

        Args:
            title: Page title
            url: Source URL
            description: Page description (truncated to 500 characters)
            **extra_fields: Additional frontmatter fields; None and empty
                strings are skipped

        Returns:
            YAML frontmatter string (with --- delimiters)
        """
        lines = ["---"]

        if title:
            lines.append(f'title: "{_quote(title)}"')

        if url:
            lines.append(f"source: {url}")

        if description:
            lines.append(f'description: "{_quote(description[:500])}"')

        for key, value in extra_fields.items():
            if value is None or value == "":
                continue
            if isinstance(value, str):
                lines.append(f'{key}: "{_quote(value)}"')
            elif isinstance(value, (list, tuple)):
                lines.append(f"{key}:")
                lines.extend(f"  - {item}" for item in value)
            else:
                lines.append(f"{key}: {value}")

        lines.append("---")
        return "\n".join(lines) + "\n\n"

    def build_from_metadata(self, metadata: PageMetadata, **extra_fields: Any) -> str:
        """Build frontmatter from extracted page metadata."""
        return self.build(
            title=metadata.title,
            url=metadata.url,
            description=metadata.description,
            author=metadata.author,
            site=metadata.site,
            published=metadata.published,
            image=metadata.image,
            word_count=metadata.word_count or None,
            **extra_fields,
        )


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")
