"""CSS-selector-based helpers for server-rendered Douyin pages.

Share pages embed their state as JSON inside ``<script>`` elements, so
extraction mostly means locating the right element and handing its raw
text to a JSON parser or a regex.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (``lxml`` parser)."""
    return BeautifulSoup(html, "lxml")


def select_text(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Raw text of the first element matched by the selector chain.

    Whitespace is preserved: script bodies are data, not prose.
    """
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match is not None:
            text = match.get_text()
            if text:
                return text
    return default


def inline_scripts(root: BeautifulSoup | Tag) -> list[str]:
    """Bodies of all inline ``<script>`` elements, in document order.

    External scripts (``src=...``) and empty bodies are skipped.
    """
    bodies: list[str] = []
    for tag in root.find_all("script"):
        if tag.get("src"):
            continue
        body = tag.get_text()
        if body.strip():
            bodies.append(body)
    return bodies
