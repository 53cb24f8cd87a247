"""
hintlight/schemas/problem.py

The scraped problem snapshot handed from the page extractor to the relay.

``ProblemInfo`` is frozen: once an extractor builds it, nothing downstream
(the channel, the relay, the prompt builder) can change it. Field names go
over the wire in camelCase (``contestId``) to match the message contract.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    LEETCODE = "LeetCode"
    CODEFORCES = "Codeforces"


class ProblemInfo(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    platform: Platform
    title: str = Field(..., min_length=1)
    slug: str | None = None
    contest_id: str | None = None
    index: str | None = None
    difficulty: str | None = None
    tags: tuple[str, ...] = ()
    content: str = ""
