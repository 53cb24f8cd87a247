"""
hintlight/extractors

Page extractors, one per supported platform, registered in priority order.
"""

from hintlight.extractors.base import (
    PlatformExtractor,
    extract_problem,
    find_extractor,
    html_to_text,
    register_extractor,
    registered_extractors,
)
from hintlight.extractors.codeforces import CodeforcesExtractor
from hintlight.extractors.leetcode import LeetCodeExtractor

register_extractor(LeetCodeExtractor())
register_extractor(CodeforcesExtractor())

__all__ = [
    "CodeforcesExtractor",
    "LeetCodeExtractor",
    "PlatformExtractor",
    "extract_problem",
    "find_extractor",
    "html_to_text",
    "register_extractor",
    "registered_extractors",
]
