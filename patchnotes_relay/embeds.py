"""Embed construction and batching for webhook delivery."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .config import RelayConfig
from .models import MessageBatch, MessageBlock, Section
from .utils import chunked

IMAGES_HEADER = "Scraped Images"


def build_blocks(
    page_title: str,
    page_url: str,
    sections: Sequence[Section],
    assets: Sequence[str],
    config: RelayConfig,
) -> List[MessageBlock]:
    """Assemble overview, section, image, and footer embeds in send order."""
    color = config.accent_color
    blocks = [MessageBlock(title=f"**{page_title}**", url=page_url, color=color)]
    blocks.extend(
        MessageBlock(title=section.title, description=section.body, color=color)
        for section in sections
    )
    if assets:
        blocks.append(MessageBlock(title=IMAGES_HEADER, description="", color=color))
        blocks.extend(MessageBlock(title="", image_url=asset, color=color) for asset in assets)
    blocks.append(
        MessageBlock(
            title="",
            description=f"Powered by: {config.product_name}",
            color=color,
        )
    )
    return blocks


def batch_blocks(blocks: Sequence[MessageBlock], size: int) -> List[MessageBatch]:
    """Group embeds into per-message batches, preserving order."""
    return chunked(blocks, size)


def build_payload(batch: MessageBatch, config: RelayConfig) -> Dict[str, Any]:
    """Shape one batch as the webhook JSON body."""
    return {
        "embeds": [block.to_embed() for block in batch],
        "username": config.username,
        "avatar_url": config.avatar_url,
    }
