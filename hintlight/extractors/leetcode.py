"""
hintlight/extractors/leetcode.py

LeetCode problem pages.

Two strategies, in order:
  1. ``#__NEXT_DATA__``: the JSON blob Next.js embeds with the server-rendered
     page state. ``props.pageProps.question`` carries everything we need.
  2. DOM selectors, when the blob is missing, unparsable or shaped
     differently. Each field has several selector candidates; the first
     non-empty match wins.

The class-name selectors in strategy 2 track LeetCode's current markup and
will need updating whenever the site is redesigned.
"""

import json
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from hintlight.core.logging import get_logger
from hintlight.extractors.base import (
    PlatformExtractor,
    all_texts,
    element_text,
    first_text,
    html_to_text,
)
from hintlight.schemas.problem import Platform, ProblemInfo

logger = get_logger(__name__)

TITLE_SELECTORS = (
    ".text-title-large a",
    '[data-cy="question-title"]',
    ".text-title-large",
)
DIFFICULTY_SELECTORS = (
    ".mt-3 .text-difficulty-easy, .mt-3 .text-difficulty-medium, .mt-3 .text-difficulty-hard",
    ".text-difficulty-easy, .text-difficulty-medium, .text-difficulty-hard",
    "[diff]",
)
TAG_SELECTORS = (
    'a[href*="/tag/"]',
)
CONTENT_SELECTORS = (
    '[class^="xtext-"]',
    '[data-track-load="description_content"]',
    ".question-content",
)

_SLUG_PATTERN = re.compile(r"/problems/([^/]+)")


def _slug_from_url(url: str) -> str | None:
    path = urlparse(url).path
    match = _SLUG_PATTERN.search(path)
    if match:
        return match.group(1)
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else None


class LeetCodeExtractor(PlatformExtractor):
    platform = Platform.LEETCODE
    host_patterns = ("leetcode.com", "leetcode.cn")

    def extract(self, soup: BeautifulSoup, url: str) -> ProblemInfo | None:
        try:
            info = self._from_next_data(soup)
            if info is not None:
                return info
        except Exception as exc:
            logger.warning(
                "leetcode_next_data_unavailable",
                error=str(exc),
                error_type=type(exc).__name__,
            )
        return self._from_dom(soup, url)

    def _from_next_data(self, soup: BeautifulSoup) -> ProblemInfo | None:
        script = soup.select_one("#__NEXT_DATA__")
        if script is None:
            return None

        data = json.loads(script.string or "")
        question = data.get("props", {}).get("pageProps", {}).get("question") or {}
        title = (question.get("title") or "").strip()
        if not title:
            logger.debug("leetcode_next_data_without_question")
            return None

        return ProblemInfo(
            platform=self.platform,
            title=title,
            slug=question.get("titleSlug"),
            difficulty=question.get("difficulty"),
            tags=tuple(tag["name"] for tag in question.get("topicTags") or []),
            content=html_to_text(question.get("content")),
        )

    def _from_dom(self, soup: BeautifulSoup, url: str) -> ProblemInfo | None:
        title = first_text(soup, TITLE_SELECTORS)
        if not title:
            return None

        content = ""
        for selector in CONTENT_SELECTORS:
            element = soup.select_one(selector)
            if element is not None:
                content = element_text(element)
                if content:
                    break

        return ProblemInfo(
            platform=self.platform,
            title=title,
            slug=_slug_from_url(url),
            difficulty=first_text(soup, DIFFICULTY_SELECTORS),
            tags=tuple(all_texts(soup, TAG_SELECTORS)),
            content=content,
        )
