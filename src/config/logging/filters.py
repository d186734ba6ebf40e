"""Filters de logging para contexto e redação de segredos.

- CorrelationIdFilter: injeta correlation_id e service
- SecretRedactionFilter: mascara app_secret e bearer tokens nas linhas
  [FEISHU-DEBUG], que carregam corpos de requisição inteiros
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "***"

_SECRET_PATTERNS = (
    re.compile(r'("app_secret"\s*:\s*")[^"]*(")'),
    re.compile(r'("(?:app|tenant)_access_token"\s*:\s*")[^"]*(")'),
    re.compile(r"(Bearer )[^\s\"']+()"),
)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


def redact_secrets(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}\g<2>", text)
    return text


class SecretRedactionFilter(logging.Filter):
    """Mascara credenciais na mensagem já formatada."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
