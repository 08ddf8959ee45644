"""Data models used throughout the relay pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import MalformedPayload

PATCH_NOTES_KIND = "patchNotesRichText"
ARTICLE_KIND = "articleRichText"


@dataclass(frozen=True)
class Blade:
    """One content unit from the page; only rich-text kinds carry a body."""

    kind: str
    rich_text_body: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "Blade":
        if not isinstance(data, dict):
            raise MalformedPayload(f"Blade entry is not an object: {type(data).__name__}")
        kind = data.get("type")
        if not isinstance(kind, str):
            raise MalformedPayload("Blade entry is missing a string 'type'")
        body: Optional[str] = None
        rich_text = data.get("richText")
        if isinstance(rich_text, dict) and isinstance(rich_text.get("body"), str):
            body = rich_text["body"]
        return cls(kind=kind, rich_text_body=body)


@dataclass(frozen=True)
class PageDocument:
    """The subset of the embedded page data consumed by the pipeline."""

    page_title: str
    blades: Tuple[Blade, ...]

    @classmethod
    def from_payload(cls, data: Any) -> "PageDocument":
        """Build a document from ``props.pageProps.page`` of the decoded JSON."""
        page = data
        for key in ("props", "pageProps", "page"):
            if not isinstance(page, dict) or key not in page:
                raise MalformedPayload(f"Page data is missing '{key}'")
            page = page[key]
        if not isinstance(page, dict):
            raise MalformedPayload("Page data 'page' is not an object")

        title = page.get("title")
        blades = page.get("blades")
        if not isinstance(title, str):
            raise MalformedPayload("Page data has no string 'title'")
        if not isinstance(blades, list):
            raise MalformedPayload("Page data has no 'blades' list")
        return cls(
            page_title=title,
            blades=tuple(Blade.from_payload(blade) for blade in blades),
        )


@dataclass(frozen=True)
class Section:
    """One logical chunk of the patch notes."""

    title: str
    body: str


@dataclass(frozen=True)
class MessageBlock:
    """A single embed delivered to the chat platform."""

    title: str
    color: int
    description: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None

    def to_embed(self) -> Dict[str, Any]:
        """Serialize the fields present on this block."""
        embed: Dict[str, Any] = {"title": self.title}
        if self.url is not None:
            embed["url"] = self.url
        if self.description is not None:
            embed["description"] = self.description
        if self.image_url is not None:
            embed["image"] = {"url": self.image_url}
        embed["color"] = self.color
        return embed


MessageBatch = List[MessageBlock]
