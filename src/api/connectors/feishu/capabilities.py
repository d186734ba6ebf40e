"""Tabela de capacidades por tipo de aplicação Feishu.

Cada operação pública consulta a tabela uma vez, antes de qualquer I/O.
"""

from __future__ import annotations

from enum import StrEnum

from api.connectors.feishu.errors import UnsupportedOperationError


class AppKind(StrEnum):
    """Tipo da aplicação registrada no Feishu."""

    CUSTOM = "custom"  # 自建应用
    STORE = "store"  # 商店应用


class Operation(StrEnum):
    APP_ACCESS_TOKEN_INTERNAL = "app_access_token_internal"
    TENANT_ACCESS_TOKEN_INTERNAL = "tenant_access_token_internal"
    SEND_MESSAGE = "send_message"
    REPLY_MESSAGE = "reply_message"
    UPLOAD_IMAGE = "upload_image"
    LIST_GROUP_CHATS = "list_group_chats"


_BOTH = frozenset({AppKind.CUSTOM, AppKind.STORE})

CAPABILITIES: dict[Operation, frozenset[AppKind]] = {
    Operation.APP_ACCESS_TOKEN_INTERNAL: frozenset({AppKind.CUSTOM}),
    Operation.TENANT_ACCESS_TOKEN_INTERNAL: frozenset({AppKind.CUSTOM}),
    Operation.SEND_MESSAGE: _BOTH,
    Operation.REPLY_MESSAGE: _BOTH,
    Operation.UPLOAD_IMAGE: _BOTH,
    Operation.LIST_GROUP_CHATS: _BOTH,
}


def is_supported(kind: AppKind, operation: Operation) -> bool:
    return kind in CAPABILITIES.get(operation, frozenset())


def ensure_supported(
    kind: AppKind,
    operation: Operation,
    *,
    api_domain: str,
    api_name: str,
) -> None:
    """Levanta UnsupportedOperationError se `kind` não pode chamar `operation`."""
    if not is_supported(kind, operation):
        raise UnsupportedOperationError(api_domain=api_domain, api_name=api_name)
