"""HTTP collaborators for fetching the source page and posting to the webhook."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

import requests

from .errors import FetchFailure, PublishFailure

logger = logging.getLogger("patchnotes_relay.transport")


def encode_payload(body: str) -> str:
    """Base64-encode a serialized payload for offline diagnosis."""
    return base64.b64encode(body.encode("utf-8")).decode("ascii")


class PageFetcher:
    """Retrieve page HTML with the relay's client label."""

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def fetch(self, url: str) -> str:
        logger.info("Fetching %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchFailure(f"Failed to fetch {url}: {exc}") from exc
        logger.debug("Fetched %d characters from %s", len(resp.text), resp.url)
        return resp.text


class WebhookPublisher:
    """Deliver JSON payloads to a chat webhook, one request per payload."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def publish(self, payload: Dict[str, Any]) -> int:
        """Post ``payload`` and return the response status code."""
        body = json.dumps(payload)
        try:
            resp = self.session.post(
                self.webhook_url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            encoded = encode_payload(body)
            raise PublishFailure(
                f"Webhook post failed: {exc}\nPayload:{encoded}",
                encoded_payload=encoded,
            ) from exc

        if not resp.ok:
            encoded = encode_payload(body)
            raise PublishFailure(
                f"Webhook post failed with status code {resp.status_code}: "
                f"{resp.text}\nPayload:{encoded}",
                status_code=resp.status_code,
                response_text=resp.text,
                encoded_payload=encoded,
            )
        return resp.status_code
