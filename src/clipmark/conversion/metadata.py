"""Page metadata from <head> tags, Open Graph and JSON-LD."""

import json
import logging
from typing import Any, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ..models.results import MetaTag, PageMetadata
from .urls import get_domain

logger = logging.getLogger(__name__)

ICON_RELS = ("icon", "shortcut icon", "apple-touch-icon")


def extract_meta_tags(soup: BeautifulSoup) -> list[MetaTag]:
    """Collect every ``<meta>`` tag carrying a name or property."""
    tags = []
    for meta in soup.find_all("meta"):
        name = meta.get("name")
        prop = meta.get("property")
        if not name and not prop:
            continue
        tags.append(MetaTag(content=meta.get("content"), name=name, property=prop))
    return tags


def extract_schema_org(soup: BeautifulSoup) -> Optional[list[dict[str, Any]]]:
    """
    Parse JSON-LD blocks.

    ``@graph`` containers are flattened; malformed blocks are skipped.

    Returns:
        The schema.org objects in document order, or None if the page has none
    """
    items: list[dict[str, Any]] = []
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            data = json.loads(script.string or script.get_text())
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
            continue

        for item in data if isinstance(data, list) else [data]:
            if not isinstance(item, dict):
                continue
            graph = item.get("@graph")
            if isinstance(graph, list):
                items.extend(node for node in graph if isinstance(node, dict))
            else:
                items.append(item)
    return items or None


class PageMetadataExtractor:
    """
    Builds ``PageMetadata`` for a parsed page.

    Each field takes the first non-empty value of: JSON-LD, Open Graph,
    plain ``<meta>`` names, then document structure (``<title>``, first
    ``<h1>``).
    """

    def extract(
        self,
        soup: BeautifulSoup,
        url: str,
        meta_tags: list[MetaTag],
        schema_org_data: Optional[list[dict[str, Any]]],
        word_count: int = 0,
    ) -> PageMetadata:
        meta = self._meta_lookup(meta_tags)
        jsonld = self._extract_jsonld(schema_org_data or [])

        title = (
            jsonld.get("title")
            or meta.get("og:title")
            or meta.get("twitter:title")
            or self._document_title(soup)
        )

        image = jsonld.get("image") or meta.get("og:image") or meta.get("twitter:image") or ""

        return PageMetadata(
            title=title,
            author=jsonld.get("author") or meta.get("author") or meta.get("article:author") or "",
            description=(
                jsonld.get("description")
                or meta.get("description")
                or meta.get("og:description")
                or meta.get("twitter:description")
                or ""
            ),
            site=jsonld.get("site") or meta.get("og:site_name") or "",
            domain=get_domain(url),
            url=url,
            favicon=self._favicon(soup, url),
            image=urljoin(url, image) if image else "",
            published=(
                jsonld.get("published")
                or meta.get("article:published_time")
                or meta.get("date")
                or ""
            ),
            word_count=word_count,
        )

    def _meta_lookup(self, meta_tags: list[MetaTag]) -> dict[str, str]:
        lookup: dict[str, str] = {}
        for tag in meta_tags:
            key = (tag.property or tag.name or "").lower()
            if key and tag.content and key not in lookup:
                lookup[key] = tag.content.strip()
        return lookup

    def _document_title(self, soup: BeautifulSoup) -> str:
        if soup.title and soup.title.string:
            return soup.title.string.strip()
        h1 = soup.find("h1")
        return h1.get_text(strip=True) if isinstance(h1, Tag) else ""

    def _favicon(self, soup: BeautifulSoup, url: str) -> str:
        for link in soup.find_all("link", href=True):
            rel = " ".join(link.get("rel") or []).lower()
            if rel in ICON_RELS:
                return urljoin(url, link["href"])
        return ""

    def _extract_jsonld(self, jsonld_list: list[dict[str, Any]]) -> dict[str, str]:
        """Map the first useful JSON-LD values onto metadata field names."""
        result: dict[str, str] = {}

        for item in jsonld_list:
            if "headline" in item and not result.get("title"):
                result["title"] = self._safe_string(item["headline"])

            if "description" in item and not result.get("description"):
                result["description"] = self._safe_string(item["description"])

            if "author" in item and not result.get("author"):
                result["author"] = self._name_of(item["author"])

            if "datePublished" in item and not result.get("published"):
                result["published"] = self._safe_string(item["datePublished"])

            if "publisher" in item and not result.get("site"):
                result["site"] = self._name_of(item["publisher"])

            if "image" in item and not result.get("image"):
                image = item["image"]
                if isinstance(image, list) and image:
                    image = image[0]
                if isinstance(image, dict):
                    result["image"] = self._safe_string(image.get("url", ""))
                else:
                    result["image"] = self._safe_string(image)

        return result

    def _name_of(self, value: Any) -> str:
        """Name of a Person/Organization given as dict, list of them, or string."""
        if isinstance(value, list):
            names = [self._name_of(entry) for entry in value]
            return ", ".join(name for name in names if name)
        if isinstance(value, dict):
            return self._safe_string(value.get("name", ""))
        return self._safe_string(value)

    def _safe_string(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (list, tuple)):
            if len(value) > 0:
                return str(value[0]).strip()
            return ""
        return str(value).strip()
