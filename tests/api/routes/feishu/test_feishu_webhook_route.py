"""Testes para a rota de eventos do Feishu."""

from __future__ import annotations

import asyncio

import pytest
from starlette.requests import Request

from api.connectors.feishu.webhook import EventIngestor
from api.routes.feishu import webhook
from app.observability import get_correlation_id

TOKEN = "v-token"


def _build_request(
    *,
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    disconnect: bool = False,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhook/feishu/",
        "raw_path": b"/webhook/feishu/",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if disconnect:
            return {"type": "http.disconnect"}
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def ingestor(monkeypatch: pytest.MonkeyPatch) -> EventIngestor:
    instance = EventIngestor(TOKEN)
    monkeypatch.setattr(webhook, "get_event_ingestor", lambda: instance)
    return instance


@pytest.mark.asyncio
async def test_url_verification_returns_challenge(ingestor: EventIngestor) -> None:
    request = _build_request(body=b'{"type":"url_verification","token":"v-token","challenge":"abc"}')

    response = await webhook.receive_event(request)

    assert response.status_code == 200
    assert response.body == b'{"challenge":"abc"}'
    assert response.media_type == "application/json"


@pytest.mark.asyncio
async def test_event_returns_empty_200(ingestor: EventIngestor) -> None:
    request = _build_request(
        body=b'{"schema":"2.0","header":{"event_type":"x.y","token":"v-token"},"event":{}}'
    )

    response = await webhook.receive_event(request)

    assert response.status_code == 200
    assert response.body == b""


@pytest.mark.asyncio
async def test_invalid_body_returns_500(ingestor: EventIngestor) -> None:
    response = await webhook.receive_event(_build_request(body=b"not json"))

    assert response.status_code == 500
    assert response.body == b""


@pytest.mark.asyncio
async def test_client_disconnect_returns_500(ingestor: EventIngestor) -> None:
    response = await webhook.receive_event(_build_request(disconnect=True))

    assert response.status_code == 500


@pytest.mark.asyncio
async def test_handler_inherits_correlation_id(ingestor: EventIngestor) -> None:
    seen: list[str] = []

    async def handler(header, event) -> None:
        await asyncio.sleep(0)
        seen.append(get_correlation_id())

    ingestor.register("im.message.receive_v1", handler)
    request = _build_request(
        body=b'{"schema":"2.0","header":{"event_type":"im.message.receive_v1","token":"v-token"},"event":{}}',
        headers={"X-Correlation-Id": "corr-feishu-1"},
    )

    await webhook.receive_event(request)
    await ingestor.drain(1)

    assert seen == ["corr-feishu-1"]
    assert get_correlation_id() == ""
