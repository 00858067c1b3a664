#!/usr/bin/env python3
"""
ScrollFeed command line entry point
Drains a segment route the way a scrolling reader would and prints every
rendered segment as one line on stdout
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, TextIO
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError

from scrollfeed.config import ScrollSettings, SettingsManager
from scrollfeed.core.container import ScrollContainer
from scrollfeed.core.protocols import NullCollaborator, ReportedError
from scrollfeed.utils.query_params import update_query_param

logger = logging.getLogger("ScrollFeed.CLI")


class ConsoleCollaborator(NullCollaborator):
    """Prints rendered segments and tracks the page URL like a browser would."""

    def __init__(self, page_url: str, out: TextIO = sys.stdout):
        self.page_url = page_url
        self.out = out
        self.rendered = 0
        self.errors: List[ReportedError] = []
        self.total: Optional[int] = None

    def render(self, payload: Any) -> None:
        self.rendered += 1
        line = payload if isinstance(payload, str) else json.dumps(payload)
        self.out.write(line.replace("\n", " ") + "\n")
        self.out.flush()

    def report_error(self, error: ReportedError) -> None:
        self.errors.append(error)
        logger.error(f"Segment request failed: {error}")

    def report_no_results(self, payload: Any) -> None:
        logger.info("No results")

    def persist_param(self, key: str, value: int) -> None:
        self.page_url = update_query_param(self.page_url, key, value)
        logger.info(f"Page is now {self.page_url}")

    def report_count(self, count: int) -> None:
        self.total = count
        logger.info(f"Server reports {count} items in total")

    def get_data_params(self) -> str:
        return urlsplit(self.page_url).query


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scrollfeed",
        description="Fetch every segment of a paginated route in order",
    )
    parser.add_argument("url", help="Segment route, its query string is sent with every request")
    parser.add_argument("--settings", type=Path, help="Path to a settings.yml file")
    parser.add_argument("--segment", type=int, help="Segment the page is already showing")
    parser.add_argument("--param", help="Name of the segment query parameter")
    parser.add_argument("--html", action="store_true", help="Treat responses as HTML fragments")
    parser.add_argument("--initial", action="store_true", help="Backfill up to --segment first")
    parser.add_argument("--max-segments", type=int, help="Stop after rendering this many segments")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_settings(args: argparse.Namespace, route: str) -> ScrollSettings:
    base = SettingsManager(args.settings).scroll if args.settings else ScrollSettings()
    overrides = {"route": route, "lock_infinite_scroll": False}
    if args.segment is not None:
        overrides["segment"] = args.segment
    if args.param:
        overrides["segment_param"] = args.param
    if args.html:
        overrides["payload_shape"] = "html"
    if args.initial:
        overrides["fetch_on_initiate"] = True
    return ScrollSettings(**{**base.model_dump(), **overrides})


async def drain(
    settings: ScrollSettings,
    collaborator: ConsoleCollaborator,
    max_segments: Optional[int] = None,
    http_client=None,
) -> int:
    container = ScrollContainer.create(
        settings=settings, collaborator=collaborator, http_client=http_client
    )
    engine = container.engine
    try:
        more = True
        while more and (max_segments is None or collaborator.rendered < max_segments):
            more = await engine.fetch()
    finally:
        await container.aclose()

    logger.info(f"Rendered {collaborator.rendered} segment(s), last segment {engine.segment}")
    return 1 if collaborator.errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    parts = urlsplit(args.url)
    route = urlunsplit(parts._replace(query="", fragment=""))
    try:
        settings = build_settings(args, route)
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return 2
    collaborator = ConsoleCollaborator(page_url=args.url)

    try:
        return asyncio.run(drain(settings, collaborator, args.max_segments))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
