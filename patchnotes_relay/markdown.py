"""Markdown conversion and section segmentation helpers."""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, Comment
from markdownify import ATX, MarkdownConverter as _Markdownify

from .errors import NoHeadingFound
from .models import Section

logger = logging.getLogger("patchnotes_relay.markdown")

SECTION_MARKER = "##"
MIN_SECTION_CHARS = 30
SUMMARY_MARKER = "Patch Notes Summary"
INLINE_IMAGE_MARKER = "![](https"
BOLD_BULLET_PREFIX = "- **"

# Tags with a Markdown rendering; anything else is dropped along with its content.
SUPPORTED_TAGS = frozenset(
    {
        "html", "body", "main", "article", "section", "div", "span", "p", "br", "hr",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "a", "b", "strong", "i", "em", "u", "s", "del", "strike", "sub", "sup",
        "code", "pre", "blockquote",
        "ul", "ol", "li",
        "table", "thead", "tbody", "tfoot", "tr", "th", "td",
        "dl", "dt", "dd",
        "img", "figure", "figcaption", "aside",
    }
)


class MarkdownConverter:
    """GitHub-flavoured HTML to Markdown conversion backed by markdownify."""

    def __init__(self) -> None:
        self._converter = _Markdownify(
            heading_style=ATX,
            bullets="-",
            escape_asterisks=False,
            escape_underscores=False,
            escape_misc=False,
        )

    @staticmethod
    def _clean(soup: BeautifulSoup) -> BeautifulSoup:
        """Remove comments and unsupported tags."""
        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()
        for tag in soup.find_all(True):
            if tag.decomposed:
                continue
            if tag.name not in SUPPORTED_TAGS:
                tag.decompose()
        return soup

    def convert(self, html: str) -> str:
        soup = self._clean(BeautifulSoup(html, "html.parser"))
        return self._converter.convert_soup(soup)


def normalize_markdown(raw_html: str, converter: MarkdownConverter) -> str:
    """Convert ``raw_html`` and drop any preamble before the first heading."""
    markdown = converter.convert(raw_html).strip()
    anchor = markdown.find("#")
    if anchor == -1:
        raise NoHeadingFound("Converted Markdown contains no heading marker")
    if anchor:
        logger.debug("Dropping %d characters of preamble before first heading", anchor)
    return markdown[anchor:]


def _non_empty_lines(text: str) -> List[str]:
    return [line.rstrip() for line in text.split("\n") if line.strip()]


def is_boilerplate_chunk(chunk: str) -> bool:
    """True for chunks too short to publish or holding the summary blurb."""
    return len(chunk) < MIN_SECTION_CHARS or SUMMARY_MARKER in chunk


def build_section(chunk: str) -> Section:
    """Turn one ``##``-delimited chunk into a titled section."""
    lines = _non_empty_lines(chunk)

    title = ""
    body = chunk
    if lines and lines[0].startswith("#"):
        title = lines[0].lstrip("# ").strip()
        body = "\n".join(lines[1:]).strip()

    lines = _non_empty_lines(body)
    if lines and lines[0].startswith(BOLD_BULLET_PREFIX) and lines[0].strip().endswith("**"):
        heading = "### " + lines[0][len(BOLD_BULLET_PREFIX):]
        lines[0] = heading.replace("**", "").strip()

    lines = [line for line in lines if INLINE_IMAGE_MARKER not in line]
    return Section(title=title, body="\n".join(lines).strip())


def segment_sections(markdown: str) -> List[Section]:
    """Split Markdown on ``##`` markers into publishable sections."""
    chunks = [chunk.strip() for chunk in markdown.split(SECTION_MARKER)]
    sections: List[Section] = []
    for chunk in chunks:
        if not chunk:
            continue
        if is_boilerplate_chunk(chunk):
            logger.debug("Skipping section chunk: %r", chunk[:40])
            continue
        sections.append(build_section(chunk))
    return sections
