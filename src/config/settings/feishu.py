"""Settings específicas do Feishu (Lark).

Credenciais da aplicação, segredos do webhook e ajustes do conector.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

FEISHU_OPEN_BASE_URL: str = "https://open.feishu.cn"
FEISHU_APP_KINDS = ("custom", "store")


@dataclass(frozen=True)
class FeishuSettings:
    """Configurações do conector Feishu.

    Attributes:
        app_id: App ID da aplicação
        app_secret: App Secret da aplicação
        encrypt_key: Encrypt Key dos eventos (vazio = eventos em claro)
        verification_token: Verification Token dos eventos
        base_url: URL base do Open API (sem barra final)
        debug: Emite linhas [FEISHU-DEBUG] com requests e eventos
        app_kind: Tipo da aplicação (custom|store)
        webhook_drain_timeout_seconds: Espera por handlers pendentes no shutdown
    """

    # Credenciais (carregadas de env ou Secret Manager)
    app_id: str = ""
    app_secret: str = ""
    encrypt_key: str = ""
    verification_token: str = ""

    # API
    base_url: str = FEISHU_OPEN_BASE_URL
    debug: bool = False
    app_kind: str = "custom"

    # Webhook
    webhook_drain_timeout_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Feishu.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_id:
            errors.append("FEISHU_APP_ID não configurado")

        if not self.app_secret:
            errors.append("FEISHU_APP_SECRET não configurado")

        if not self.verification_token:
            errors.append("FEISHU_VERIFICATION_TOKEN não configurado")

        if not self.base_url.startswith(("http://", "https://")):
            errors.append("FEISHU_BASE_URL deve começar com http:// ou https://")

        if self.app_kind not in FEISHU_APP_KINDS:
            errors.append("FEISHU_APP_KIND deve ser 'custom' ou 'store'")

        if self.webhook_drain_timeout_seconds <= 0:
            errors.append("FEISHU_WEBHOOK_DRAIN_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> FeishuSettings:
    """Carrega FeishuSettings a partir de variáveis de ambiente."""
    return FeishuSettings(
        app_id=os.getenv("FEISHU_APP_ID", ""),
        app_secret=os.getenv("FEISHU_APP_SECRET", ""),
        encrypt_key=os.getenv("FEISHU_ENCRYPT_KEY", ""),
        verification_token=os.getenv("FEISHU_VERIFICATION_TOKEN", ""),
        base_url=os.getenv("FEISHU_BASE_URL", FEISHU_OPEN_BASE_URL).rstrip("/"),
        debug=os.getenv("FEISHU_DEBUG", "").lower() in ("true", "1", "yes"),
        app_kind=os.getenv("FEISHU_APP_KIND", "custom").lower(),
        webhook_drain_timeout_seconds=float(
            os.getenv("FEISHU_WEBHOOK_DRAIN_TIMEOUT_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_feishu_settings() -> FeishuSettings:
    """Retorna instância cacheada de FeishuSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
