"""
hintlight/extractors/codeforces.py

Codeforces problem pages. DOM only, Codeforces embeds no structured data.

The statement header reads like ``A. Watermelon``; the contest index prefix
is trimmed to get the title. Contest id and index come from the URL path
(``/contest/4/problem/A`` or ``/problemset/problem/4/A``).
"""

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from hintlight.extractors.base import PlatformExtractor, all_texts, element_text
from hintlight.schemas.problem import Platform, ProblemInfo

TAG_SELECTORS = (
    ".problem-statement .tag-box",
    ".roundbox .tag-box",
)
CONTENT_SELECTORS = (
    ".problem-statement > div:nth-child(2)",
)

_PATH_PATTERNS = (
    re.compile(r"problem/(\d+)/([A-Z]\d?)"),
    re.compile(r"contest/(\d+)/problem/([A-Z]\d?)"),
)
_INDEX_PREFIX = re.compile(r"^[A-Z]\d?\.\s*")


def _clean_title(header: str) -> str:
    header = header.strip()
    match = _INDEX_PREFIX.match(header)
    if match:
        return header[match.end():].strip()
    return header[2:].strip()


class CodeforcesExtractor(PlatformExtractor):
    platform = Platform.CODEFORCES
    host_patterns = ("codeforces.com",)

    def extract(self, soup: BeautifulSoup, url: str) -> ProblemInfo | None:
        header = soup.select_one(".problem-statement .title")
        title = _clean_title(header.get_text()) if header is not None else ""
        if not title:
            return None

        path = urlparse(url).path
        match = next((m for m in (p.search(path) for p in _PATH_PATTERNS) if m), None)

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
            contest_id=match.group(1) if match else None,
            index=match.group(2) if match else None,
            tags=tuple(all_texts(soup, TAG_SELECTORS)),
            content=content,
        )
