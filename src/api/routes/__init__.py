"""Rotas HTTP da API: adapters de entrada por canal.

Estrutura:
- routes/feishu/: webhook de eventos do Feishu

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
