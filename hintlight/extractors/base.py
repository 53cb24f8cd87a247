"""
hintlight/extractors/base.py

Shared pieces of the page extractor: the ``PlatformExtractor`` interface,
the hostname registry, HTML-to-text conversion and the public
``extract_problem()`` entrypoint.

Usage:
    from hintlight.extractors import extract_problem
    info = extract_problem(page_html, "https://codeforces.com/problemset/problem/4/A")
    if info is None:
        ...  # unsupported host or no title on the page
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from hintlight.core.logging import get_logger
from hintlight.schemas.problem import Platform, ProblemInfo

logger = get_logger(__name__)

# Elements whose text never belongs to a problem statement.
_NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

HTML_PARSER = "html.parser"


def html_to_text(html: str | None) -> str:
    """Return the rendered text of an HTML fragment.

    Scripts and styles are dropped before reading the text, so embedded code
    is never executed and never leaks into the result.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, HTML_PARSER)
    return element_text(soup)


def element_text(element: Tag) -> str:
    """Text content of an element, ignoring script/style descendants."""
    for junk in element.find_all(_NON_CONTENT_TAGS):
        junk.decompose()
    return element.get_text().strip()


def first_text(soup: BeautifulSoup, selectors: Iterable[str]) -> str | None:
    """Try each CSS selector in order, return the first non-empty stripped text."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element.get_text(" ", strip=True)
        if text:
            return text
    return None


def all_texts(soup: BeautifulSoup, selectors: Iterable[str]) -> list[str]:
    """Texts of every match of the first selector that matches anything."""
    for selector in selectors:
        elements = soup.select(selector)
        texts = [el.get_text(" ", strip=True) for el in elements]
        texts = [t for t in texts if t]
        if texts:
            return texts
    return []


class PlatformExtractor(ABC):
    """Scrapes one platform's problem pages into a ``ProblemInfo``.

    Subclasses declare which hostnames they handle and implement
    ``extract()``. They may return ``None`` when the page has no title;
    unexpected exceptions are caught by ``extract_problem()``.
    """

    platform: Platform
    host_patterns: tuple[str, ...] = ()

    def matches(self, hostname: str) -> bool:
        return any(pattern in hostname for pattern in self.host_patterns)

    @abstractmethod
    def extract(self, soup: BeautifulSoup, url: str) -> ProblemInfo | None:
        raise NotImplementedError


# Ordered: the first extractor whose pattern matches the hostname wins.
_registry: list[PlatformExtractor] = []


def register_extractor(extractor: PlatformExtractor) -> PlatformExtractor:
    """Append an extractor to the registry (lowest priority)."""
    _registry.append(extractor)
    return extractor


def registered_extractors() -> list[PlatformExtractor]:
    return list(_registry)


def find_extractor(url: str) -> PlatformExtractor | None:
    hostname = (urlparse(url).hostname or "").lower()
    if not hostname:
        return None
    for extractor in _registry:
        if extractor.matches(hostname):
            return extractor
    return None


def extract_problem(html: str, url: str) -> ProblemInfo | None:
    """Scrape the page into a ``ProblemInfo``.

    Returns ``None`` for unsupported hosts and for pages with no resolvable
    title. Never raises: parser or selector errors are logged and reported
    as ``None``. The input HTML is parsed into a private tree, so the
    caller's page is never modified.
    """
    extractor = find_extractor(url)
    if extractor is None:
        logger.info("extraction_unsupported_host", url=url)
        return None

    try:
        soup = BeautifulSoup(html or "", HTML_PARSER)
        info = extractor.extract(soup, url)
    except Exception as exc:
        logger.error(
            "extraction_failed",
            platform=extractor.platform.value,
            url=url,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return None

    if info is None:
        logger.info("extraction_no_title", platform=extractor.platform.value, url=url)
        return None

    logger.info(
        "extraction_success",
        platform=info.platform.value,
        title=info.title,
        tags=len(info.tags),
        content_length=len(info.content),
    )
    return info
