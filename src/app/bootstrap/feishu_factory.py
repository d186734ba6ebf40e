"""Factory de wiring para o Feishu (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.feishu.http_client import FeishuHttpClient, create_feishu_http_client
from api.connectors.feishu.webhook import EventIngestor
from app.constants.feishu import EventType
from app.coordinators.feishu.message_received import log_message_received
from config.logging import get_feishu_debug_logger
from config.settings import get_feishu_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from config.settings import FeishuSettings


def create_feishu_client(
    settings: FeishuSettings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FeishuHttpClient:
    """Cria cliente do Open API com settings do ambiente."""
    return create_feishu_http_client(settings, http_client=http_client)


def create_event_ingestor(
    settings: FeishuSettings | None = None,
    on_handler_error: Callable[[BaseException, str], None] | None = None,
) -> EventIngestor:
    """Cria ingestor de eventos com o handler padrão de mensagens registrado."""
    feishu = settings or get_feishu_settings()
    ingestor = EventIngestor(
        feishu.verification_token,
        feishu.encrypt_key,
        on_handler_error=on_handler_error,
        debug=feishu.debug,
        debug_logger=get_feishu_debug_logger() if feishu.debug else None,
    )
    ingestor.register(EventType.MESSAGE_RECEIVED, log_message_received)
    return ingestor
