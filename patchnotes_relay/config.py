"""Configuration objects and constants for the relay."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

WEBHOOK_ENV_VAR = "DISCORD_WEBHOOK_URL"
DEFAULT_USER_AGENT = "RadiantConnect 1.0"
DEFAULT_USERNAME = "Radiant Connect | Valorant Patch Notes"
DEFAULT_AVATAR_URL = "https://assets.radiantconnect.ca/valorant/valorant-icon.jpg"
DEFAULT_PRODUCT_NAME = "RadiantConnect"
ACCENT_COLOR = 5814783
MAX_EMBEDS_PER_MESSAGE = 10


@dataclass
class RelayConfig:
    """Top-level settings that control fetching and publishing behaviour."""

    webhook_url: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    username: str = DEFAULT_USERNAME
    avatar_url: str = DEFAULT_AVATAR_URL
    product_name: str = DEFAULT_PRODUCT_NAME
    accent_color: int = ACCENT_COLOR
    max_embeds_per_message: int = MAX_EMBEDS_PER_MESSAGE
    timeout: float = 30.0


def load_webhook_url(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the destination webhook from the environment, or None if unset."""
    env = os.environ if environ is None else environ
    value = env.get(WEBHOOK_ENV_VAR, "").strip()
    return value or None
