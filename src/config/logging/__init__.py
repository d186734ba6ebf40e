"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="feishu_connector")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("feishu_token_refresh", extra={"token_slot": "app_access_token"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    FEISHU_DEBUG_LOGGER,
    configure_logging,
    get_feishu_debug_logger,
    get_logger,
)
from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter, redact_secrets
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FEISHU_DEBUG_LOGGER",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_feishu_debug_logger",
    "get_logger",
    "redact_secrets",
]
