"""Regex heuristics for pulling text and images out of feed HTML.

These are deliberately not an HTML parser: they scan raw markup the same way
for every feed, so malformed tags or unusual quoting can be missed.
"""

from __future__ import annotations

import re
from typing import List, Optional

SNIPPET_MAX_CHARS = 225
ELLIPSIS = "..."

IMG_SRC_RE = re.compile(r"""<img [^>]*src=["']([^"']+)["']""", re.IGNORECASE)
TAG_RE = re.compile(r"</?[^>]+(>|$)")


def extract_image(html: Optional[str]) -> Optional[str]:
    """Return the ``src`` of the first ``<img>`` tag in ``html``, if any."""

    if not html:
        return None
    match = IMG_SRC_RE.search(html)
    return match.group(1) if match else None


def strip_html(text: str) -> str:
    return TAG_RE.sub("", text)


def make_snippet(text: str) -> str:
    """Strip tags, cut to :data:`SNIPPET_MAX_CHARS` and append ``"..."``.

    The ellipsis is appended even when nothing was cut.
    """

    return strip_html(text)[:SNIPPET_MAX_CHARS] + ELLIPSIS


def normalize_categories(value: object) -> List[str]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [value]
    return []


__all__ = [
    "ELLIPSIS",
    "SNIPPET_MAX_CHARS",
    "extract_image",
    "make_snippet",
    "normalize_categories",
    "strip_html",
]
