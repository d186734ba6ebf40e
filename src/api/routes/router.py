"""Agregador de rotas: registra todos os routers por canal.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.feishu.router import router as feishu_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    api_router.include_router(
        feishu_router,
        prefix="/webhook/feishu",
        tags=["feishu"],
    )

    return api_router
