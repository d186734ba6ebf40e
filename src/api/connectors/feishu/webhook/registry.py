"""Registro de handlers de evento, por instância de ingestor.

Dois mapas independentes (schema 2.0 e 1.0); registrar de novo o mesmo
tipo substitui o handler anterior.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from api.connectors.feishu.models import EventHeaderV1, EventHeaderV2

logger = logging.getLogger(__name__)

# Handler recebe o header e o JSON bruto do `event`; pode ser async ou sync.
EventHandler: TypeAlias = Callable[[EventHeaderV2, bytes], Awaitable[Any] | Any]
EventHandlerV1: TypeAlias = Callable[[EventHeaderV1, bytes], Awaitable[Any] | Any]


class HandlerRegistry:
    def __init__(self) -> None:
        self._v2: dict[str, EventHandler] = {}
        self._v1: dict[str, EventHandlerV1] = {}

    def register(self, event_type: str, handler: EventHandler) -> None:
        if event_type in self._v2:
            logger.info("feishu_event_handler_replaced", extra={"event_type": event_type})
        self._v2[str(event_type)] = handler

    def register_v1(self, event_type: str, handler: EventHandlerV1) -> None:
        if event_type in self._v1:
            logger.info(
                "feishu_event_handler_replaced",
                extra={"event_type": event_type, "schema": "1.0"},
            )
        self._v1[str(event_type)] = handler

    def lookup(self, event_type: str) -> EventHandler | None:
        return self._v2.get(event_type)

    def lookup_v1(self, event_type: str) -> EventHandlerV1 | None:
        return self._v1.get(event_type)
