"""Runtime do webhook Feishu: ingestor e cliente do Open API lazy, shutdown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from api.connectors.feishu.http_client import FeishuHttpClient
    from api.connectors.feishu.webhook import EventIngestor

logger = logging.getLogger(__name__)

_event_ingestor: EventIngestor | None = None
_feishu_client: FeishuHttpClient | None = None


def get_event_ingestor() -> EventIngestor:
    """Obtém o ingestor de eventos (lazy-loading)."""
    global _event_ingestor
    if _event_ingestor is None:
        from app.bootstrap.feishu_factory import create_event_ingestor

        _event_ingestor = create_event_ingestor()
    return _event_ingestor


def get_feishu_client() -> FeishuHttpClient:
    """Obtém o cliente do Open API compartilhado pelos handlers (lazy-loading)."""
    global _feishu_client
    if _feishu_client is None:
        from app.bootstrap.feishu_factory import create_feishu_client

        _feishu_client = create_feishu_client()
    return _feishu_client


def set_event_ingestor(ingestor: EventIngestor | None) -> None:
    """Substitui o ingestor (testes e wiring customizado)."""
    global _event_ingestor
    _event_ingestor = ingestor


async def shutdown_runtime(timeout_seconds: float = 30.0) -> None:
    """Drena handlers pendentes e fecha o cliente HTTP."""
    global _feishu_client
    if _event_ingestor is not None:
        await _event_ingestor.drain(timeout_seconds)
    if _feishu_client is not None:
        await _feishu_client.aclose()
        _feishu_client = None
    logger.info("feishu_runtime_stopped", extra={"timeout_seconds": timeout_seconds})
