"""Text processing utilities."""

import html
import re
from typing import Any

import nh3


_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """Generate a URL-safe slug from a title or name.

    Character references are decoded first, then the input is lowercased,
    every run of characters outside ``[a-z0-9]`` collapses into a single
    hyphen and hyphens are stripped from both ends.

    Args:
        name: The input string to slugify

    Returns:
        URL-safe lowercase slug (empty if the input has no alphanumerics)

    Examples:
        >>> generate_slug("Hello, World!  2024")
        'hello-world-2024'
        >>> generate_slug("Tom &amp; Jerry")
        'tom-jerry'
    """
    return _NON_ALPHANUMERIC.sub("-", html.unescape(name).lower()).strip("-")


def sanitize_text(value: str) -> str:
    """Strip all HTML markup from user-supplied text and return plain text.

    Tags are removed and the bodies of ``script`` and ``style`` elements are
    dropped. The result is unescaped again, so ``&`` and ``<`` are stored as
    typed. Cleaning repeats until stable, which keeps entity-encoded markup
    such as ``&lt;script&gt;`` from turning back into a tag.

    Examples:
        >>> sanitize_text("<b>Tom</b> & Jerry<script>alert(1)</script>")
        'Tom & Jerry'
    """
    text = value
    while True:
        cleaned = html.unescape(nh3.clean(text, tags=set()))
        if cleaned == text:
            return text.strip()
        text = cleaned


def sanitize_input(value: Any) -> Any:
    """Pre-validation hook for request schemas.

    Strings are sanitized so length constraints apply to the stored value;
    anything else is returned untouched for the type check to reject.
    """
    return sanitize_text(value) if isinstance(value, str) else value


def truncate(value: str, length: int) -> str:
    """Return at most ``length`` leading characters of ``value``."""
    return value[:length]
