"""Ingestão de eventos de webhook do Feishu.

Fluxo de `ingest(raw_body)`:
1. Parse do corpo (falha -> 500)
2. Decrypt se houver `encrypt` (falha -> 500, sem classificar)
3. Classificação e verificação do token antes de qualquer lookup
4. Handler agendado em task destacada; resposta imediata

Tokens divergentes e eventos sem handler respondem 200 para o Feishu não
reenviar; só falhas antes da classificação geram 500.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from api.connectors.feishu.errors import SecurityError
from api.connectors.feishu.request_options import RequestOptions
from api.connectors.feishu.webhook.dispatch import HandlerDispatcher
from api.connectors.feishu.webhook.envelope import (
    Unrecognized,
    V1Envelope,
    V2Envelope,
    VerificationPing,
    classify_envelope,
)
from api.connectors.feishu.webhook.receive import (
    InvalidJsonError,
    open_envelope,
    parse_event_body,
)
from api.connectors.feishu.webhook.registry import HandlerRegistry
from api.connectors.feishu.webhook.verify import verify_event_token
from app.infra.crypto import CryptoError

if TYPE_CHECKING:
    from collections.abc import Callable

    from api.connectors.feishu.webhook.registry import EventHandler, EventHandlerV1
    from app.protocols.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

EVENT_DOMAIN = "event"
EVENT_API_NAME = "receive_event"


class IngestOutcome(StrEnum):
    CHALLENGE_ANSWERED = "challenge_answered"
    DISPATCHED = "dispatched"
    UNREGISTERED = "unregistered"
    TOKEN_MISMATCH = "token_mismatch"
    UNRECOGNIZED = "unrecognized"
    INVALID_BODY = "invalid_body"
    DECRYPT_FAILED = "decrypt_failed"


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Resposta HTTP a devolver ao Feishu (body None = sem corpo)."""

    status_code: int
    body: bytes | None
    outcome: IngestOutcome


class EventIngestor:
    """Recebe, verifica, descriptografa e despacha eventos do Feishu."""

    def __init__(
        self,
        verification_token: str,
        encrypt_key: str = "",
        *,
        registry: HandlerRegistry | None = None,
        on_handler_error: Callable[[BaseException, str], None] | None = None,
        debug: bool = False,
        debug_logger: DebugLogger | None = None,
    ) -> None:
        self._verification_token = verification_token
        self._encrypt_key = encrypt_key
        self.registry = registry or HandlerRegistry()
        self._dispatcher = HandlerDispatcher(on_handler_error)
        self._debug = RequestOptions(
            api_domain=EVENT_DOMAIN,
            api_name=EVENT_API_NAME,
            debug=debug,
            debug_logger=debug_logger,
        )

    def register(self, event_type: str, handler: EventHandler) -> None:
        """Registra handler de eventos schema 2.0 (substitui o anterior)."""
        self.registry.register(event_type, handler)

    def register_v1(self, event_type: str, handler: EventHandlerV1) -> None:
        """Registra handler de eventos schema 1.0 (substitui o anterior)."""
        self.registry.register_v1(event_type, handler)

    @property
    def pending_handlers(self) -> int:
        return self._dispatcher.active_count

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        await self._dispatcher.drain(timeout_seconds)

    async def ingest(self, raw_body: bytes) -> IngestResult:
        """Processa um POST de evento e devolve a resposta a enviar."""
        try:
            envelope = open_envelope(parse_event_body(raw_body), self._encrypt_key)
            inbound = classify_envelope(envelope)
        except CryptoError as exc:
            self._log_debug(f"decrypt event: {exc}")
            logger.warning("feishu_event_decrypt_failed", extra={"error": str(exc)})
            return IngestResult(500, None, IngestOutcome.DECRYPT_FAILED)
        except InvalidJsonError as exc:
            self._log_debug(f"unmarshal event: {exc}")
            logger.warning("feishu_event_json_invalid", extra={"error": str(exc)})
            return IngestResult(500, None, IngestOutcome.INVALID_BODY)

        if isinstance(inbound, VerificationPing):
            return self._answer_challenge(inbound)
        if isinstance(inbound, V2Envelope):
            return self._dispatch_v2(inbound)
        if isinstance(inbound, V1Envelope):
            return self._dispatch_v1(inbound)
        return self._unrecognized(inbound)

    def _answer_challenge(self, ping: VerificationPing) -> IngestResult:
        if not self._token_matches(ping.token, schema="url_verification"):
            return IngestResult(200, None, IngestOutcome.TOKEN_MISMATCH)
        body = json.dumps({"challenge": ping.challenge}, ensure_ascii=False, separators=(",", ":"))
        self._log_debug("url_verification successful")
        logger.info("feishu_url_verification_answered")
        return IngestResult(200, body.encode("utf-8"), IngestOutcome.CHALLENGE_ANSWERED)

    def _dispatch_v2(self, envelope: V2Envelope) -> IngestResult:
        header = envelope.header
        if not self._token_matches(header.token, schema="2.0"):
            return IngestResult(200, None, IngestOutcome.TOKEN_MISMATCH)

        handler = self.registry.lookup(header.event_type)
        if handler is None:
            self._log_debug(f"unregistered event: {header.event_type}")
            logger.info(
                "feishu_event_unregistered",
                extra={"event_type": header.event_type, "schema": "2.0"},
            )
            return IngestResult(200, None, IngestOutcome.UNREGISTERED)

        self._dispatcher.dispatch(handler, header, envelope.event, header.event_type)
        return IngestResult(200, None, IngestOutcome.DISPATCHED)

    def _dispatch_v1(self, envelope: V1Envelope) -> IngestResult:
        header = envelope.header
        if not self._token_matches(header.token, schema="1.0"):
            return IngestResult(200, None, IngestOutcome.TOKEN_MISMATCH)

        handler = self.registry.lookup_v1(header.type)
        if handler is None:
            self._log_debug(f"unregistered event(v1.0): {header.type}")
            logger.info(
                "feishu_event_unregistered",
                extra={"event_type": header.type, "schema": "1.0"},
            )
            return IngestResult(200, None, IngestOutcome.UNREGISTERED)

        self._dispatcher.dispatch(handler, header, envelope.event, header.type)
        return IngestResult(200, None, IngestOutcome.DISPATCHED)

    def _unrecognized(self, inbound: Unrecognized) -> IngestResult:
        self._log_debug(f"unrecognized envelope: {inbound.reason}")
        logger.warning("feishu_event_unrecognized", extra={"reason": inbound.reason})
        return IngestResult(200, None, IngestOutcome.UNRECOGNIZED)

    def _token_matches(self, received: str, *, schema: str) -> bool:
        try:
            verify_event_token(received, self._verification_token)
        except SecurityError:
            self._log_debug("unexpected event callback token")
            logger.warning("feishu_event_token_mismatch", extra={"schema": schema})
            return False
        return True

    def _log_debug(self, msg: str) -> None:
        self._debug.debug_log(f"[{EVENT_DOMAIN} - {EVENT_API_NAME}] {msg}")
