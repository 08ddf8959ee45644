"""Shared fixtures for relay tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from patchnotes_relay.config import RelayConfig


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(webhook_url="https://discord.example/api/webhooks/1/token")


@pytest.fixture
def patch_page() -> Dict[str, Any]:
    return {
        "title": "VALORANT Patch Notes 11.07",
        "url": "/news/game-updates/valorant-patch-notes-11-07/",
        "blades": [
            {"type": "articleMasthead", "title": "VALORANT Patch Notes 11.07"},
            {
                "type": "articleRichText",
                "richText": {"type": "html", "body": "<p>Thanks for reading, see you next patch!</p>"},
            },
            {
                "type": "patchNotesRichText",
                "richText": {
                    "type": "html",
                    "body": (
                        "<p>Intro blurb before any heading.</p>"
                        "<h2>Patch Notes Summary</h2><p>Short.</p>"
                        "<h3>Agent Updates</h3>"
                        "<ul><li><strong>Clove</strong></li></ul>"
                        "<p>Pick Me Up duration reduced from 10s to 8s.</p>"
                        "<p><img alt=\"\" src=\"https://cdn.example/clove.png\"></p>"
                    ),
                },
            },
            {"type": "patchNotesRichText"},
        ],
    }
