"""Testes para a aplicação ASGI (rota montada e prefixo)."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from api.connectors.feishu.http_client import FeishuHttpClient
from api.connectors.feishu.webhook import EventIngestor
from api.routes.feishu import webhook_runtime
from app.app import create_app, lifespan


@pytest.fixture
def ingestor() -> Iterator[EventIngestor]:
    instance = EventIngestor("v-token")
    webhook_runtime.set_event_ingestor(instance)
    yield instance
    webhook_runtime.set_event_ingestor(None)


@pytest.mark.asyncio
async def test_webhook_mounted_under_feishu_prefix(ingestor: EventIngestor) -> None:
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post(
            "/webhook/feishu/",
            content=b'{"type":"url_verification","token":"v-token","challenge":"xyz"}',
        )

    assert response.status_code == 200
    assert response.json() == {"challenge": "xyz"}


@pytest.mark.asyncio
async def test_unknown_path_is_404(ingestor: EventIngestor) -> None:
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post("/webhook/slack/", content=b"{}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_lifespan_shares_client_and_closes_it(
    ingestor: EventIngestor, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("app.app.validate_runtime_settings", lambda: None)
    monkeypatch.setattr(webhook_runtime, "_feishu_client", None)
    fastapi_app = create_app()

    async with lifespan(fastapi_app):
        client = fastapi_app.state.feishu_client
        assert isinstance(client, FeishuHttpClient)
        assert webhook_runtime.get_feishu_client() is client
        assert fastapi_app.state.event_ingestor is ingestor

    assert webhook_runtime._feishu_client is None
