"""Conector Feishu (Lark) - adapter de borda para o Open API.

Este módulo é o único ponto de IO com o Feishu.
Responsabilidades:
- Cache e coordenação de access tokens
- Pipeline HTTP (JSON e multipart) com X-Request-Id nos erros
- Endpoints de mensagens, imagens e grupos
- Webhook de eventos (decrypt, verificação de token, dispatch)
"""

from .capabilities import AppKind, Operation, ensure_supported
from .errors import (
    ApiError,
    DecodeError,
    EncodeError,
    FeishuError,
    SecurityError,
    TransportError,
    UnsupportedOperationError,
)
from .http_base import RawResponse, RequestPipeline
from .http_client import FeishuHttpClient, create_feishu_http_client, next_page_query
from .request_options import MultipartPart, RequestOptions
from .token_cache import CredentialCache
from .token_coordinator import TokenCoordinator, TokenGrant

__all__ = [
    "ApiError",
    "AppKind",
    "CredentialCache",
    "DecodeError",
    "EncodeError",
    "FeishuError",
    "FeishuHttpClient",
    "MultipartPart",
    "Operation",
    "RawResponse",
    "RequestOptions",
    "RequestPipeline",
    "SecurityError",
    "TokenCoordinator",
    "TokenGrant",
    "TransportError",
    "UnsupportedOperationError",
    "create_feishu_http_client",
    "ensure_supported",
    "next_page_query",
]
