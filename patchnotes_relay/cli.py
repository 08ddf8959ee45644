"""Command-line entry point for the patch-notes relay."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .config import RelayConfig, load_webhook_url
from .errors import RelayError
from .relay import run_relay
from .transport import PageFetcher

logger = logging.getLogger("patchnotes_relay.cli")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape a patch-notes page and republish it to a Discord webhook.",
    )
    parser.add_argument("url", help="Absolute URL of the patch-notes page")
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="HTTP timeout in seconds for the page fetch and each webhook post",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print webhook payloads as JSON to STDOUT instead of posting them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    config = RelayConfig(webhook_url=load_webhook_url(), timeout=args.timeout)
    fetcher = PageFetcher(config.user_agent, timeout=config.timeout)
    try:
        result = run_relay(args.url, config, fetcher, dry_run=args.dry_run)
    except RelayError as exc:
        logger.error("%s", exc)
        return 1

    if args.dry_run:
        for payload in result.prepared.payloads:
            sys.stdout.write(json.dumps(payload) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
