from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from hintlight.core.config import get_settings
from hintlight.services.llm import GeminiClient
from hintlight.services.relay import HintRelay
from hintlight.services.settings_store import SettingsStore

FIXTURES = Path(__file__).parent / "fixtures"

GEMINI_BASE = "https://gemini.test/v1beta"
GEMINI_MODEL = "gemini-test"

LEETCODE_URL = "https://leetcode.com/problems/two-sum/description/"
CODEFORCES_URL = "https://codeforces.com/problemset/problem/4/A"

HINTS_TEXT = (
    "Here are some hints:\n"
    "* **Hint 1:** Think about the **parity** of the weight.\n"
    "* Both halves must be positive, so `w = 2` is special.\n"
    "* Any even weight greater than 2 works."
)


class InMemoryRedis:
    """Async stand-in for the handful of redis.asyncio calls the app makes."""

    def __init__(self, fail: bool = False) -> None:
        self.data: dict[str, str] = {}
        self.fail = fail
        self.calls: list[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise RedisConnectionError("connection refused")

    async def get(self, key: str) -> str | None:
        self._record("get")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._record("set")
        self.data[key] = value
        return True

    async def delete(self, key: str) -> int:
        self._record("delete")
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        self._record("ping")
        return True

    async def aclose(self) -> None:
        pass


class GeminiStub:
    """Builds an httpx.MockTransport that answers like generateContent."""

    def __init__(self, status_code: int = 200, payload=None, text: str = HINTS_TEXT, exc=None):
        self.status_code = status_code
        self.payload = payload
        self.text = text
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(request)
        if self.payload is not None:
            if isinstance(self.payload, (bytes, str)):
                return httpx.Response(self.status_code, content=self.payload)
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(
            self.status_code,
            json={"candidates": [{"content": {"parts": [{"text": self.text}]}}]},
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HINTLIGHT_SETTLE_DELAY_MS", "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def load_fixture():
    def _load(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def redis() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def store(redis: InMemoryRedis) -> SettingsStore:
    return SettingsStore(redis, namespace="test")


@pytest.fixture
def gemini() -> GeminiStub:
    return GeminiStub()


@pytest.fixture
def relay_factory(store: SettingsStore):
    def _factory(stub: GeminiStub) -> HintRelay:
        llm = GeminiClient(stub.client(), api_base=GEMINI_BASE, model=GEMINI_MODEL)
        return HintRelay(store, llm)

    return _factory
