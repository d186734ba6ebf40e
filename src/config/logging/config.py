"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="feishu_connector")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("feishu_event_dispatched", extra={"event_type": "im.message.receive_v1"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "feishu_connector"

# Logger que recebe as linhas [FEISHU-DEBUG] do conector
FEISHU_DEBUG_LOGGER = "feishu.debug"

# Bibliotecas de transporte que logam cada request em INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [_build_handler(level_upper, service_name, correlation_id_getter)]

    # Linhas [FEISHU-DEBUG] saem sempre que o conector as emitir
    debug_logger = logging.getLogger(FEISHU_DEBUG_LOGGER)
    debug_logger.setLevel(logging.DEBUG)
    debug_logger.propagate = False
    debug_logger.handlers = [_build_handler("DEBUG", service_name, correlation_id_getter)]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SecretRedactionFilter())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)


def get_feishu_debug_logger() -> logging.Logger:
    """Logger para as linhas [FEISHU-DEBUG] (satisfaz o protocolo DebugLogger).

    Quem decide se as linhas saem é a flag de debug do conector, não o
    nível do root; `configure_logging` dá a este logger um handler próprio.
    """
    return logging.getLogger(FEISHU_DEBUG_LOGGER)
