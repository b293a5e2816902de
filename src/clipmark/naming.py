"""Filename sanitization for clipped pages."""

import re
import sys
from typing import Optional

MAX_FILENAME_LENGTH = 245  # leaves room for " 1.md"

_MARKDOWN_UNSAFE_RE = re.compile(r"[#^\[\]|]")
_WINDOWS_RESERVED_CHARS_RE = re.compile(r'[<>:"/\\?*\x00-\x1f]')
_WINDOWS_RESERVED_NAMES_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING_RE = re.compile(r"[\s.]+$")
_MAC_RESERVED_CHARS_RE = re.compile(r"[/:\x00-\x1f]")


def _platform_family(platform: str) -> str:
    platform = platform.lower()
    if platform.startswith("win") or platform == "cygwin":
        return "windows"
    if "darwin" in platform or "mac" in platform:
        return "mac"
    return "linux"


def sanitize_filename(name: str, platform: Optional[str] = None) -> str:
    """
    Make ``name`` safe to use as a file name (without extension).

    Args:
        name: Proposed name, usually the page title
        platform: ``sys.platform``-style name; defaults to the running platform

    Returns:
        Sanitized name, at most 245 characters, never empty ("Untitled")
    """
    family = _platform_family(platform or sys.platform)

    sanitized = _MARKDOWN_UNSAFE_RE.sub("", name)

    if family == "windows":
        sanitized = _WINDOWS_RESERVED_CHARS_RE.sub("", sanitized)
        sanitized = _WINDOWS_RESERVED_NAMES_RE.sub(r"_\1\2", sanitized)
        sanitized = _WINDOWS_TRAILING_RE.sub("", sanitized)
    elif family == "mac":
        sanitized = _MAC_RESERVED_CHARS_RE.sub("", sanitized)
        sanitized = re.sub(r"^\.", "_", sanitized)
    else:
        sanitized = _WINDOWS_RESERVED_CHARS_RE.sub("", sanitized)
        sanitized = re.sub(r"^\.", "_", sanitized)

    sanitized = sanitized.lstrip(".").strip()[:MAX_FILENAME_LENGTH]

    return sanitized or "Untitled"
