"""End-to-end pipeline tests with fake collaborators."""

from __future__ import annotations

import logging

import pytest
import requests

from patchnotes_relay.config import RelayConfig
from patchnotes_relay.content import SoupScriptExtractor
from patchnotes_relay.errors import (
    ConfigurationFailure,
    InvalidInput,
    NoHeadingFound,
    NoScriptBlockFound,
    PublishFailure,
)
from patchnotes_relay.relay import prepare_relay, run_relay
from tests._relay_helpers import FakeFetcher, FakePublisher, make_page_html

PAGE_URL = "https://playvalorant.com/en-us/news/game-updates/valorant-patch-notes-11-07/"


class FailingPublisher(FakePublisher):
    def __init__(self, fail_on: int) -> None:
        super().__init__()
        self.fail_on = fail_on

    def publish(self, payload):
        if len(self.payloads) + 1 == self.fail_on:
            raise PublishFailure("Webhook post failed with status code 500", status_code=500)
        return super().publish(payload)


class TestPrepareRelay:
    def test_builds_sections_and_gallery(self, patch_page, config):
        prepared = prepare_relay(make_page_html(patch_page), PAGE_URL, config)

        assert prepared.page_title == "VALORANT Patch Notes 11.07"
        assert prepared.assets == ["https://cdn.example/clove.png"]
        titles = [section.title for section in prepared.sections]
        assert titles == ["Agent Updates"]
        body = prepared.sections[0].body
        assert body.startswith("### Clove")
        assert "Pick Me Up duration reduced" in body
        assert "![](https" not in body

        assert len(prepared.payloads) == 1
        embeds = prepared.payloads[0]["embeds"]
        assert embeds[0] == {
            "title": "**VALORANT Patch Notes 11.07**",
            "url": PAGE_URL,
            "color": 5814783,
        }
        assert [embed["title"] for embed in embeds[2:4]] == ["Scraped Images", ""]
        assert embeds[3]["image"] == {"url": "https://cdn.example/clove.png"}
        assert embeds[-1]["description"] == "Powered by: RadiantConnect"

    def test_article_text_follows_patch_notes(self, patch_page, config):
        prepared = prepare_relay(make_page_html(patch_page), PAGE_URL, config)
        assert "Thanks for reading" in prepared.sections[-1].body

    def test_soup_extractor_matches_regex(self, patch_page, config):
        html = make_page_html(patch_page)
        assert prepare_relay(html, PAGE_URL, config, extractor=SoupScriptExtractor()) == prepare_relay(
            html, PAGE_URL, config
        )

    def test_logs_under_module_logger(self, patch_page, config, caplog):
        with caplog.at_level(logging.INFO, logger="patchnotes_relay.relay"):
            prepare_relay(make_page_html(patch_page), PAGE_URL, config)
        assert any(record.name == "patchnotes_relay.relay" for record in caplog.records)

    def test_page_without_headings(self, config):
        page = {"title": "T", "blades": [{"type": "articleRichText", "richText": {"body": "<p>plain</p>"}}]}
        with pytest.raises(NoHeadingFound):
            prepare_relay(make_page_html(page), PAGE_URL, config)


class TestRunRelay:
    def test_delivers_every_batch_in_order(self, patch_page, config):
        page = dict(patch_page)
        sections = "".join(
            f"<h3>Section {i}</h3><p>Details for section number {i} go here.</p>" for i in range(12)
        )
        page["blades"] = [{"type": "patchNotesRichText", "richText": {"body": sections}}]
        publisher = FakePublisher()

        result = run_relay(PAGE_URL, config, FakeFetcher(make_page_html(page)), publisher)

        assert result.delivered == 2
        assert result.statuses == [204, 204]
        assert [len(p["embeds"]) for p in publisher.payloads] == [10, 4]
        titles = [embed["title"] for p in publisher.payloads for embed in p["embeds"]]
        assert titles[1:13] == [f"Section {i}" for i in range(12)]
        assert all(p["username"] == config.username for p in publisher.payloads)

    @pytest.mark.parametrize("url", ["", "   ", "not a url", "/relative/path"])
    def test_invalid_url_makes_no_calls(self, url, config):
        fetcher = FakeFetcher("")
        with pytest.raises(InvalidInput):
            run_relay(url, config, fetcher, FakePublisher())
        assert fetcher.calls == []

    def test_extraction_failure_skips_publish(self, config):
        publisher = FakePublisher()
        with pytest.raises(NoScriptBlockFound):
            run_relay(PAGE_URL, config, FakeFetcher("<html></html>"), publisher)
        assert publisher.payloads == []

    def test_missing_webhook_halts_before_publish(self, patch_page, monkeypatch):
        def fail_post(*args, **kwargs):
            raise AssertionError("publish must not be attempted")

        monkeypatch.setattr(requests.Session, "post", fail_post)
        fetcher = FakeFetcher(make_page_html(patch_page))
        with pytest.raises(ConfigurationFailure):
            run_relay(PAGE_URL, RelayConfig(), fetcher)
        assert fetcher.calls == [PAGE_URL]

    def test_dry_run_needs_no_webhook(self, patch_page):
        result = run_relay(
            PAGE_URL, RelayConfig(), FakeFetcher(make_page_html(patch_page)), dry_run=True
        )
        assert result.delivered == 0
        assert len(result.prepared.payloads) == 1

    def test_publish_failure_stops_remaining_batches(self, patch_page, config):
        page = dict(patch_page)
        page["blades"] = [
            {
                "type": "patchNotesRichText",
                "richText": {
                    "body": "".join(
                        f"<h3>Section {i}</h3><p>Details for section number {i}.</p>" for i in range(25)
                    )
                },
            }
        ]
        publisher = FailingPublisher(fail_on=2)
        with pytest.raises(PublishFailure):
            run_relay(PAGE_URL, config, FakeFetcher(make_page_html(page)), publisher)
        assert len(publisher.payloads) == 1
