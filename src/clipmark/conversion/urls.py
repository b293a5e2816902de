"""Absolute URL rewriting for content fragments."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlparse, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

URL_ATTRIBUTES = ("src", "href", "srcset")

# References that are already usable as-is
UNTOUCHED_PREFIXES = ("#", "data:", "//")
STANDARD_SCHEMES = {"http", "https"}

_IPV4_RE = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_SECOND_LEVEL_RE = re.compile(r"^(co|com|org|net|edu|gov|mil)\.[a-z]{2}$")
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")


def get_domain(url: str) -> str:
    """
    Extract the registrable domain from a URL.

    Examples:
        >>> get_domain("https://www.example.com/path")
        'example.com'
        >>> get_domain("https://www.example.co.uk")
        'example.co.uk'
        >>> get_domain("http://localhost:3000")
        'localhost'
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        logger.warning(f"Invalid URL: {url}")
        return ""

    if hostname in ("localhost", "127.0.0.1") or _IPV4_RE.match(hostname):
        return hostname

    parts = hostname.split(".")
    if len(parts) > 2 and _SECOND_LEVEL_RE.match(".".join(parts[-2:])):
        return ".".join(parts[-3:])

    return ".".join(parts[-2:])


def directory_base(base_url: str) -> str:
    """Normalize a base URL to its directory by dropping a trailing filename."""
    parts = urlsplit(base_url)
    path = parts.path
    if not path.endswith("/"):
        path = path[: path.rfind("/") + 1] or "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def resolve_url(value: str, base_url: str) -> str:
    """
    Resolve a single URL reference against ``base_url``.

    Absolute http(s) URLs, data URIs, fragments, protocol-relative and
    opaque-scheme references (``mailto:``, ``tel:``) come back unchanged.

    Raises:
        ValueError: If the reference or the base URL cannot be parsed
    """
    value = value.strip()
    if not value or value.startswith(UNTOUCHED_PREFIXES):
        return value

    scheme_match = _SCHEME_RE.match(value)
    if scheme_match:
        scheme = scheme_match.group(1).lower()
        if scheme in STANDARD_SCHEMES or "://" not in value:
            return value
        return _resolve_foreign_scheme(value, base_url)

    return urljoin(directory_base(base_url), value)


def _resolve_foreign_scheme(value: str, base_url: str) -> str:
    """Rewrite browser-local schemes such as ``chrome-extension://``."""
    base = urlsplit(base_url)
    parts = value.split("/")
    first_segment = parts[2] if len(parts) > 2 else ""

    if "." in first_segment:
        # Looks like a host: keep it, swap in the page's scheme
        return f"{base.scheme}://{value.split('://', 1)[1]}"

    # Extension-local resource: re-root its path at the page
    path = "/".join(parts[3:])
    return urljoin(directory_base(base_url), path)


def resolve_srcset(value: str, base_url: str) -> str:
    """Resolve every candidate of a ``srcset`` value, keeping descriptors."""
    candidates = []
    for url, descriptor in parse_srcset(value):
        resolved = resolve_url(url, base_url)
        candidates.append(f"{resolved} {descriptor}" if descriptor else resolved)
    return ", ".join(candidates)


def parse_srcset(value: str) -> list[tuple[str, str]]:
    """
    Split a ``srcset`` value into ``(url, descriptor)`` pairs.

    URLs are runs of non-whitespace, so commas inside data URIs survive;
    a comma directly ending a URL separates candidates.
    """
    candidates: list[tuple[str, str]] = []
    pos = 0
    length = len(value)

    while pos < length:
        while pos < length and (value[pos].isspace() or value[pos] == ","):
            pos += 1
        if pos >= length:
            break

        start = pos
        while pos < length and not value[pos].isspace():
            pos += 1
        url = value[start:pos]

        if url.endswith(","):
            candidates.append((url.rstrip(","), ""))
            continue

        start = pos
        while pos < length and value[pos] != ",":
            pos += 1
        candidates.append((url, value[start:pos].strip()))
        pos += 1

    return candidates


def make_url_absolute(element: Tag, attribute: str, base_url: str) -> None:
    """Rewrite one URL attribute of ``element`` in place.

    Failures are logged and leave the attribute untouched.
    """
    value = element.get(attribute)
    if not value or not isinstance(value, str):
        return

    try:
        if attribute == "srcset":
            resolved = resolve_srcset(value, base_url)
        else:
            resolved = resolve_url(value, base_url)
    except ValueError as e:
        logger.warning(f"Failed to process {attribute} URL {value!r}: {e}")
        return

    element[attribute] = resolved


def resolve_tree(root: Tag, base_url: str) -> Tag:
    """Make every ``src``/``href``/``srcset`` under ``root`` absolute, in place."""
    for element in root.find_all(True):
        for attribute in URL_ATTRIBUTES:
            if element.has_attr(attribute):
                make_url_absolute(element, attribute, base_url)
    return root


def resolve_urls(html: str, base_url: str) -> str:
    """
    Rewrite relative URLs in an HTML fragment to absolute ones.

    Args:
        html: HTML fragment
        base_url: URL of the page the fragment came from

    Returns:
        The fragment re-serialized with absolute URLs
    """
    soup = BeautifulSoup(html, "html.parser")
    resolve_tree(soup, base_url)
    return str(soup)
