"""Helpers de logging para o Open API do Feishu (sem tokens nem segredos)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import ApiError

logger = logging.getLogger(__name__)


def log_api_error(api_error: ApiError, method: str, path: str) -> None:
    """Loga `code` != 0 devolvido pelo Feishu."""
    logger.warning(
        "feishu_api_error",
        extra={
            "method": method,
            "path": path,
            "api_domain": api_error.api_domain,
            "api_name": api_error.api_name,
            "error_code": api_error.code,
            "request_id": api_error.request_id,
        },
    )
