"""Endpoint de eventos do Feishu.

Endpoints:
- POST /webhook/feishu: url_verification e eventos (schema 1.0 e 2.0)

Fluxo:
1. Lê o corpo bruto (falha de leitura -> 500)
2. Delega ao EventIngestor (decrypt, verificação de token, dispatch)
3. Responde imediatamente; handlers seguem em tasks destacadas
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status
from starlette.requests import ClientDisconnect

from api.routes.feishu.webhook_runtime import get_event_ingestor
from app.observability import correlation_scope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/")
async def receive_event(request: Request) -> Response:
    """Recebimento de eventos do Feishu.

    Returns:
        200 com `{"challenge": ...}` na verificação de URL, 200 vazio para
        eventos (inclusive descartados) ou 500 se o corpo não puder ser aberto.
    """
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        try:
            raw_body = await request.body()
        except ClientDisconnect as exc:
            logger.warning(
                "feishu_webhook_body_read_failed",
                extra={"channel": "feishu", "error_type": type(exc).__name__},
            )
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        result = await get_event_ingestor().ingest(raw_body)
        logger.info(
            "feishu_webhook_received",
            extra={
                "channel": "feishu",
                "correlation_id": correlation_id,
                "outcome": str(result.outcome),
                "status_code": result.status_code,
                "payload_size": len(raw_body),
            },
        )

        if result.body is None:
            return Response(status_code=result.status_code)
        return Response(
            content=result.body,
            media_type="application/json",
            status_code=result.status_code,
        )
