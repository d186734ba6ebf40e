"""Taxonomia de erros do conector Feishu.

Todo erro outbound carrega o contexto da chamada (domínio e nome da API) e,
quando a resposta chegou a ser lida, o X-Request-Id devolvido pelo Feishu.
O formato da mensagem muda conforme a presença do request_id, o tipo não.
"""

from __future__ import annotations


class FeishuError(Exception):
    """Erro base das chamadas ao Open API do Feishu."""

    def __init__(
        self,
        cause: str,
        *,
        api_domain: str = "",
        api_name: str = "",
        request_id: str = "",
    ) -> None:
        self.cause = cause
        self.api_domain = api_domain
        self.api_name = api_name
        self.request_id = request_id
        super().__init__(format_error_message(cause, api_domain, api_name, request_id))


def format_error_message(cause: str, api_domain: str, api_name: str, request_id: str) -> str:
    """Formata mensagem de erro com ou sem X-Request-ID."""
    if request_id:
        return f"[{api_domain}] {api_name} (X-Request-ID: {request_id}): {cause}"
    return f"[{api_domain}] {api_name}: {cause}"


class TransportError(FeishuError):
    """Falha ao alcançar o host remoto ou ao ler o corpo da resposta."""


class EncodeError(FeishuError):
    """Falha local ao montar o corpo JSON ou multipart."""


class DecodeError(FeishuError):
    """Corpo da resposta não é JSON válido ou não tem o formato esperado."""


class ApiError(FeishuError):
    """Feishu respondeu com `code` diferente de zero."""

    def __init__(
        self,
        code: int,
        msg: str,
        *,
        api_domain: str = "",
        api_name: str = "",
        request_id: str = "",
    ) -> None:
        self.code = code
        self.msg = msg
        super().__init__(
            f"{code}: {msg}",
            api_domain=api_domain,
            api_name=api_name,
            request_id=request_id,
        )


class UnsupportedOperationError(FeishuError):
    """O tipo de aplicação configurado não possui esta capacidade."""

    def __init__(self, *, api_domain: str, api_name: str) -> None:
        super().__init__("not supported", api_domain=api_domain, api_name=api_name)


class SecurityError(ValueError):
    """Verification token do evento não confere com o configurado."""
