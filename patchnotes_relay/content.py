"""Page data extraction and rich-text selection utilities."""

from __future__ import annotations

import json
import logging
import re
from typing import List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup

from .errors import MalformedPayload, NoScriptBlockFound
from .models import ARTICLE_KIND, PATCH_NOTES_KIND, PageDocument

logger = logging.getLogger("patchnotes_relay.content")

SCRIPT_PATTERN = re.compile(r"<script[^>]*?>(.*?)</script>", re.DOTALL | re.IGNORECASE)
IMAGE_PATTERN = re.compile(r"<img\b[^>]*?\ssrc=\"([^\"]*)\"[^>]*>", re.IGNORECASE)


class ScriptBlockExtractor(Protocol):
    """Locate the page-data script block inside raw HTML."""

    def extract_script_body(self, html: str) -> str:
        ...


def _pick_last(bodies: List[str]) -> str:
    """Prefer the last block carrying data over trailing empty loader tags."""
    if not bodies:
        raise NoScriptBlockFound("No <script> block found in page HTML")
    for body in reversed(bodies):
        if body.strip():
            return body
    return bodies[-1]


class RegexScriptExtractor:
    """Pattern-match script tags without building a DOM."""

    def extract_script_body(self, html: str) -> str:
        return _pick_last(SCRIPT_PATTERN.findall(html))


class SoupScriptExtractor:
    """Walk script tags with BeautifulSoup; tolerant of odd attribute quoting."""

    def extract_script_body(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        return _pick_last([tag.string or "" for tag in soup.find_all("script")])


def extract_page_document(
    html: str,
    extractor: Optional[ScriptBlockExtractor] = None,
) -> PageDocument:
    """Parse the embedded page data from the last script block of ``html``."""
    extractor = extractor or RegexScriptExtractor()
    body = extractor.extract_script_body(html)
    logger.debug("Page data script block: %d characters", len(body))
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise MalformedPayload(f"Last script block is not valid JSON: {exc}") from exc
    return PageDocument.from_payload(data)


def find_image_sources(body: str) -> List[str]:
    """Return every ``<img src="...">`` URL in ``body`` in order of appearance."""
    return IMAGE_PATTERN.findall(body)


def select_patch_text(document: PageDocument) -> Tuple[str, List[str]]:
    """Concatenate the patch-note and article bodies and collect image URLs.

    Patch-note blades come first, then article blades, each group in page
    order. Blades without a body are skipped. Images are not deduplicated.
    """
    bodies: List[str] = []
    for kind in (PATCH_NOTES_KIND, ARTICLE_KIND):
        bodies.extend(
            blade.rich_text_body
            for blade in document.blades
            if blade.kind == kind and blade.rich_text_body is not None
        )

    assets: List[str] = []
    for body in bodies:
        assets.extend(find_image_sources(body))

    logger.debug("Selected %d rich-text bodies with %d images", len(bodies), len(assets))
    return "\n".join(bodies), assets
