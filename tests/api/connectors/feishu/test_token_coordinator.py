"""Testes para TokenCoordinator (refresh único sob concorrência)."""

from __future__ import annotations

import asyncio

import pytest

from api.connectors.feishu.errors import TransportError
from api.connectors.feishu.token_cache import CredentialCache
from api.connectors.feishu.token_coordinator import (
    TOKEN_MIN_REMAINING_SECONDS,
    TokenCoordinator,
    TokenGrant,
)


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _counting_refresh(values: list[str]):
    calls = {"count": 0}

    async def refresh() -> TokenGrant:
        calls["count"] += 1
        await asyncio.sleep(0)
        return TokenGrant(values[min(calls["count"], len(values)) - 1], 7200)

    return refresh, calls


def test_margin_is_thirty_minutes() -> None:
    assert TOKEN_MIN_REMAINING_SECONDS == 1800


@pytest.mark.asyncio
async def test_concurrent_acquire_refreshes_once() -> None:
    refresh, calls = _counting_refresh(["t-1", "t-2"])
    coordinator = TokenCoordinator("app_access_token", refresh, cache=CredentialCache(FakeClock()))

    tokens = await asyncio.gather(*(coordinator.acquire() for _ in range(10)))

    assert tokens == ["t-1"] * 10
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_refreshes_when_inside_margin() -> None:
    clock = FakeClock()
    refresh, calls = _counting_refresh(["t-1", "t-2"])
    coordinator = TokenCoordinator("app_access_token", refresh, cache=CredentialCache(clock))

    assert await coordinator.acquire() == "t-1"
    clock.now = 7200 - 1800 - 1
    assert await coordinator.acquire() == "t-1"
    clock.now = 7200 - 1800
    assert await coordinator.acquire() == "t-2"
    assert calls["count"] == 2


@pytest.mark.asyncio
async def test_refresh_failure_propagates_and_keeps_cache() -> None:
    async def failing() -> TokenGrant:
        raise TransportError("boom", api_domain="auth", api_name="app_access_token_internal")

    cache = CredentialCache(FakeClock())
    coordinator = TokenCoordinator("app_access_token", failing, cache=cache)

    with pytest.raises(TransportError, match=r"\[auth\] app_access_token_internal: boom"):
        await coordinator.acquire()
    assert cache.is_empty()


@pytest.mark.asyncio
async def test_store_populates_slot_without_refresh() -> None:
    refresh, calls = _counting_refresh(["never"])
    coordinator = TokenCoordinator("tenant_access_token", refresh, cache=CredentialCache(FakeClock()))

    coordinator.store(TokenGrant("stored", 7200))

    assert await coordinator.acquire() == "stored"
    assert calls["count"] == 0
