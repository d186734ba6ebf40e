"""Testes para CredentialCache (validade com margem)."""

from __future__ import annotations

import pytest

from api.connectors.feishu.token_cache import CredentialCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestCredentialCache:
    def test_new_cache_is_empty_and_invalid(self) -> None:
        cache = CredentialCache(FakeClock())
        assert cache.is_empty()
        assert not cache.is_valid()
        assert cache.get() == ""

    def test_valid_until_margin(self) -> None:
        clock = FakeClock()
        cache = CredentialCache(clock)
        cache.set("t-1", 7200, 1800)

        assert cache.is_valid()
        clock.advance(5399)
        assert cache.is_valid()
        clock.advance(1)
        assert not cache.is_valid()

    @pytest.mark.parametrize(
        ("lifetime", "margin", "expected"),
        [
            (7200, 1800, True),
            (1801, 1800, True),
            (1800, 1800, False),
            (600, 1800, False),
            (0, 0, False),
        ],
    )
    def test_valid_immediately_iff_lifetime_exceeds_margin(
        self, lifetime: float, margin: float, expected: bool
    ) -> None:
        cache = CredentialCache(FakeClock())
        cache.set("t", lifetime, margin)
        assert cache.is_valid() is expected

    def test_get_returns_stale_value(self) -> None:
        clock = FakeClock()
        cache = CredentialCache(clock)
        cache.set("stale", 10, 0)
        clock.advance(3600)

        assert not cache.is_valid()
        assert cache.get() == "stale"
        assert not cache.is_empty()

    def test_set_overwrites_whole_slot(self) -> None:
        clock = FakeClock()
        cache = CredentialCache(clock)
        cache.set("old", 10, 0)
        clock.advance(100)
        cache.set("new", 7200, 1800)

        assert cache.get() == "new"
        assert cache.is_valid()
