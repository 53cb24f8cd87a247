"""
hintlight/cli.py

Run the hint overlay on a saved problem page.

    python -m hintlight.cli page.html --url https://leetcode.com/problems/two-sum/
    python -m hintlight.cli page.html --url ... --relay-url http://localhost:8000
    python -m hintlight.cli page.html --url ... --inject > page-with-hints.html

Without ``--relay-url`` the relay runs in-process and reads the API key from
the configured Redis settings store. The rendered modal (or, with
``--inject``, the whole page) is written to stdout; logs go to stderr.
Exits 1 when the overlay ends in the error state.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import httpx

from hintlight.core.config import get_settings
from hintlight.core.logging import get_logger, setup_logging
from hintlight.overlay.controller import OverlayController, PageSnapshot
from hintlight.overlay.render import inject_overlay
from hintlight.overlay.state import OverlayStatus
from hintlight.services.channel import HttpChannel, LocalChannel
from hintlight.services.llm import GeminiClient
from hintlight.services.redis_client import close_redis, init_redis
from hintlight.services.relay import HintRelay
from hintlight.services.settings_store import SettingsStore

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hintlight",
        description="Generate progressive hints for a saved LeetCode/Codeforces page.",
    )
    parser.add_argument("page", type=Path, help="Path to the saved page HTML")
    parser.add_argument("--url", required=True, help="Original URL of the page")
    parser.add_argument(
        "--relay-url",
        help="Base URL of a running hintlight service (default: relay in-process)",
    )
    parser.add_argument(
        "--inject",
        action="store_true",
        help="Print the page with the overlay injected instead of just the modal",
    )
    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    html = args.page.read_text(encoding="utf-8")
    page = PageSnapshot(html=html, url=args.url)

    async with httpx.AsyncClient(timeout=settings.llm_timeout_seconds) as http:
        redis = None
        if args.relay_url:
            channel = HttpChannel(http, args.relay_url)
        else:
            redis = await init_redis()
            relay = HintRelay(
                SettingsStore(redis, settings.settings_namespace),
                GeminiClient(http, api_base=settings.gemini_api_base, model=settings.gemini_model),
            )
            channel = LocalChannel(relay)

        try:
            controller = OverlayController(channel, settle_delay=settings.settle_delay_seconds)
            state = await controller.trigger(page)
        finally:
            if redis is not None:
                await close_redis(redis)

    output = inject_overlay(html, state) if args.inject else controller.html
    sys.stdout.write(output + "\n")

    logger.info("cli_done", status=state.status.value, panels=len(state.panels))
    return 1 if state.status is OverlayStatus.ERROR else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(environment=get_settings().environment, stream=sys.stderr)

    if not args.page.is_file():
        logger.error("cli_page_not_found", path=str(args.page))
        return 2

    try:
        return asyncio.run(run(args))
    except RuntimeError as exc:
        # init_redis() reports an unreachable settings store this way.
        logger.error("cli_fatal_error", error=str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
