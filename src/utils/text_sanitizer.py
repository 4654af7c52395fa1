"""Markup stripping for free-text event fields.

Event descriptions are stored as organiser-supplied HTML.  Before they are
sent to the phrase-extraction service every tag is removed under an
allow-nothing policy: only character data survives, and the contents of
``<script>``/``<style>`` blocks are dropped with their tags.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

# Elements whose text content is code, not prose.
_DROP_WITH_CONTENT = ("script", "style", "noscript", "iframe", "object", "embed", "template")

_MULTI_SPACE = re.compile(r"[ \t\r\f\v]+")


def strip_markup(html: str | None) -> str:
    """Return *html* as plain text with all markup removed.

    >>> strip_markup("<script>alert(1)</script>Great venue")
    'Great venue'
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_DROP_WITH_CONTENT):
        tag.decompose()

    text = soup.get_text()
    return _MULTI_SPACE.sub(" ", text).strip()


def compose_text_blob(name: str, subtitle: str, description: str, venue_name: str) -> str:
    """Join the four descriptive fields, space separated, in extraction order."""
    return f"{name} {subtitle} {description} {venue_name}"
