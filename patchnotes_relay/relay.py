"""High-level orchestration for turning a patch-notes page into webhook posts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .config import RelayConfig
from .content import ScriptBlockExtractor, extract_page_document, select_patch_text
from .embeds import batch_blocks, build_blocks, build_payload
from .errors import ConfigurationFailure, InvalidInput
from .markdown import MarkdownConverter, normalize_markdown, segment_sections
from .models import Section
from .transport import WebhookPublisher
from .utils import is_absolute_url

logger = logging.getLogger("patchnotes_relay.relay")


class Fetcher(Protocol):
    def fetch(self, url: str) -> str:
        ...


class Publisher(Protocol):
    def publish(self, payload: Dict[str, Any]) -> int:
        ...


@dataclass
class PreparedRelay:
    """Content built from one page, ready for delivery."""

    page_title: str
    sections: List[Section]
    assets: List[str]
    payloads: List[Dict[str, Any]]


@dataclass
class RelayResult:
    """Outcome of a relay run."""

    url: str
    prepared: PreparedRelay
    delivered: int = 0
    statuses: List[int] = field(default_factory=list)


def prepare_relay(
    html: str,
    page_url: str,
    config: RelayConfig,
    converter: Optional[MarkdownConverter] = None,
    extractor: Optional[ScriptBlockExtractor] = None,
) -> PreparedRelay:
    """Run extraction through batching on already-fetched HTML."""
    converter = converter or MarkdownConverter()
    document = extract_page_document(html, extractor)
    patch_text, assets = select_patch_text(document)
    markdown = normalize_markdown(patch_text, converter)
    sections = segment_sections(markdown)
    logger.info(
        "Built %d sections and %d images for '%s'",
        len(sections),
        len(assets),
        document.page_title,
    )

    blocks = build_blocks(document.page_title, page_url, sections, assets, config)
    batches = batch_blocks(blocks, config.max_embeds_per_message)
    return PreparedRelay(
        page_title=document.page_title,
        sections=sections,
        assets=assets,
        payloads=[build_payload(batch, config) for batch in batches],
    )


def run_relay(
    url: str,
    config: RelayConfig,
    fetcher: Fetcher,
    publisher: Optional[Publisher] = None,
    converter: Optional[MarkdownConverter] = None,
    extractor: Optional[ScriptBlockExtractor] = None,
    dry_run: bool = False,
) -> RelayResult:
    """Fetch ``url``, build the embeds, and deliver each batch in order."""
    if not url or not url.strip():
        raise InvalidInput("Missing url")
    if not is_absolute_url(url):
        raise InvalidInput(f"Failed to parse url: {url}")

    html = fetcher.fetch(url)
    prepared = prepare_relay(html, url, config, converter, extractor)
    result = RelayResult(url=url, prepared=prepared)
    if dry_run:
        logger.info("Dry run: skipping delivery of %d payloads", len(prepared.payloads))
        return result

    if publisher is None:
        if not config.webhook_url:
            raise ConfigurationFailure("Missing DISCORD_WEBHOOK_URL environment variable")
        publisher = WebhookPublisher(config.webhook_url, timeout=config.timeout)

    total = len(prepared.payloads)
    for index, payload in enumerate(prepared.payloads, start=1):
        status = publisher.publish(payload)
        result.statuses.append(status)
        result.delivered += 1
        logger.info("Delivered batch %d/%d (%d embeds)", index, total, len(payload["embeds"]))
    return result
