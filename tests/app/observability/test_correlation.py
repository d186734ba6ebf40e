"""Testes para o correlation_id por request."""

from __future__ import annotations

import asyncio

import pytest

from app.observability import correlation_scope, get_correlation_id, set_correlation_id
from app.observability.correlation import reset_correlation_id


def test_default_is_empty() -> None:
    assert get_correlation_id() == ""


def test_scope_sets_and_restores() -> None:
    with correlation_scope("corr-1") as correlation_id:
        assert correlation_id == "corr-1"
        assert get_correlation_id() == "corr-1"
    assert get_correlation_id() == ""


def test_scope_generates_when_missing() -> None:
    with correlation_scope(None) as correlation_id:
        assert len(correlation_id) == 32
        assert get_correlation_id() == correlation_id


def test_set_and_reset() -> None:
    token = set_correlation_id("corr-2")
    assert get_correlation_id() == "corr-2"
    reset_correlation_id(token)
    assert get_correlation_id() == ""


@pytest.mark.asyncio
async def test_tasks_inherit_scope() -> None:
    async def read() -> str:
        return get_correlation_id()

    with correlation_scope("corr-task"):
        task = asyncio.create_task(read())
    assert await task == "corr-task"
