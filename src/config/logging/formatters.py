"""Formatters de logging estruturado.

Campos obrigatórios em todo log JSON:
- asctime, level, logger, message
- correlation_id, service

Mensagens do Feishu costumam trazer texto em chinês; o formatter não
escapa caracteres não-ASCII.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios, na ordem em que aparecem no JSON
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,120",
            "level": "INFO",
            "logger": "api.connectors.feishu.webhook.dispatch",
            "message": "feishu_event_dispatched",
            "correlation_id": "abc-123",
            "service": "feishu_connector",
            "event_type": "im.message.receive_v1"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
