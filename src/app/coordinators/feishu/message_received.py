"""Handler padrão de `im.message.receive_v1`.

Registra no log a chegada da mensagem (sem conteúdo nem IDs de usuário).
Serviços que precisam responder registram o próprio handler por cima.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.feishu.models import EventMessageReceived
from api.connectors.feishu.webhook import parse_event

if TYPE_CHECKING:
    from api.connectors.feishu.models import EventHeaderV2

logger = logging.getLogger(__name__)


async def log_message_received(header: EventHeaderV2, event: bytes) -> None:
    """Valida o evento e loga metadados da mensagem."""
    received = parse_event(event, EventMessageReceived)
    logger.info(
        "feishu_message_received",
        extra={
            "event_id": header.event_id,
            "chat_type": received.message.chat_type,
            "message_type": received.message.message_type,
            "mentions": len(received.message.mentions),
            "sender_type": received.sender.sender_type,
        },
    )
