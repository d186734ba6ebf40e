"""Entrypoint do servidor de webhook do Feishu.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.feishu.webhook_runtime import (
    get_event_ingestor,
    get_feishu_client,
    shutdown_runtime,
)
from app.bootstrap import initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings, get_feishu_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Cria o ingestor de eventos
    - Cria o cliente do Open API compartilhado (`app.state.feishu_client`)

    Shutdown:
    - Aguarda handlers de evento pendentes
    - Fecha o cliente HTTP do Open API
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()
    app.state.event_ingestor = get_event_ingestor()
    app.state.feishu_client = get_feishu_client()

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await shutdown_runtime(timeout_seconds=get_feishu_settings().webhook_drain_timeout_seconds)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="Feishu Connector",
        description="Webhook de eventos e cliente do Open API do Feishu",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if base.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if base.is_production else "/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": base.service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting feishu connector in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
