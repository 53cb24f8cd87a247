from __future__ import annotations

import pytest

from hintlight.core.errors import TransportError
from hintlight.services.settings_store import INVALID_KEY_MESSAGE


@pytest.mark.anyio
async def test_unset_key_reads_as_none(store) -> None:
    assert await store.get_api_key() is None


@pytest.mark.anyio
async def test_key_is_trimmed_and_namespaced(store, redis) -> None:
    await store.set_api_key("  AIza-secret \n")

    assert await store.get_api_key() == "AIza-secret"
    assert redis.data == {"test:apiKey": "AIza-secret"}


@pytest.mark.anyio
@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
async def test_blank_key_is_rejected(store, redis, value) -> None:
    with pytest.raises(ValueError, match=INVALID_KEY_MESSAGE):
        await store.set_api_key(value)
    assert redis.data == {}


@pytest.mark.anyio
async def test_clear(store) -> None:
    await store.set_api_key("AIza-secret")
    await store.clear_api_key()
    assert await store.get_api_key() is None


@pytest.mark.anyio
async def test_redis_errors_become_transport_errors(store, redis) -> None:
    redis.fail = True
    with pytest.raises(TransportError):
        await store.get_api_key()
    with pytest.raises(TransportError):
        await store.set_api_key("AIza-secret")
