"""Decode e checagem de respostas do Open API."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError

from api.connectors.feishu.errors import ApiError, DecodeError

if TYPE_CHECKING:
    from api.connectors.feishu.http_base import RawResponse
    from api.connectors.feishu.models import FeishuResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_response(
    raw: RawResponse | bytes,
    shape: type[ModelT],
    api_domain: str,
    api_name: str,
    request_id: str = "",
) -> ModelT:
    """Valida os bytes da resposta no modelo esperado.

    Raises:
        DecodeError: JSON inválido ou formato incompatível com `shape`.
    """
    content = raw if isinstance(raw, bytes | bytearray) else raw.content
    try:
        return shape.model_validate_json(content)
    except ValidationError as exc:
        raise DecodeError(
            _summarize(exc),
            api_domain=api_domain,
            api_name=api_name,
            request_id=request_id,
        ) from exc


def check_response(
    envelope: FeishuResponse,
    request_id: str,
    api_domain: str,
    api_name: str,
) -> None:
    """Levanta ApiError quando o Feishu devolve `code` diferente de zero."""
    if envelope.code != 0:
        raise ApiError(
            envelope.code,
            envelope.msg,
            api_domain=api_domain,
            api_name=api_name,
            request_id=request_id,
        )


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid response"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"{loc}: {first.get('msg', 'invalid')}"
