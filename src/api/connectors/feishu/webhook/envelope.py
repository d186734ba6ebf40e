"""Classificação do envelope de webhook em união explícita.

Ordem (primeiro que casar vence):
1. `type == "url_verification"`  -> VerificationPing
2. `schema == "2.0"` com `header` -> V2Envelope
3. `uuid` não vazio               -> V1Envelope
4. resto                          -> Unrecognized
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from api.connectors.feishu.models import EventHeaderV1, EventHeaderV2
from api.connectors.feishu.webhook.receive import InvalidJsonError
from app.constants.feishu import EventType

if TYPE_CHECKING:
    from api.connectors.feishu.webhook.receive import ParsedEnvelope

SCHEMA_V2 = "2.0"
_V1_HEADER_FIELDS = ("ts", "uuid", "token", "type")


@dataclass(frozen=True, slots=True)
class VerificationPing:
    token: str
    challenge: str


@dataclass(frozen=True, slots=True)
class V2Envelope:
    header: EventHeaderV2
    event: bytes  # JSON bruto, como recebido


@dataclass(frozen=True, slots=True)
class V1Envelope:
    header: EventHeaderV1
    event: bytes  # JSON bruto, como recebido


@dataclass(frozen=True, slots=True)
class Unrecognized:
    reason: str


InboundEnvelope = VerificationPing | V2Envelope | V1Envelope | Unrecognized


def classify_envelope(envelope: ParsedEnvelope) -> InboundEnvelope:
    """Classifica o envelope (já descriptografado).

    Raises:
        InvalidJsonError: header presente mas com tipos incompatíveis
    """
    fields = envelope.fields

    if fields.get("type") == EventType.URL_VERIFICATION:
        return VerificationPing(
            token=_as_str(fields.get("token")),
            challenge=_as_str(fields.get("challenge")),
        )

    if fields.get("schema") == SCHEMA_V2:
        header = fields.get("header")
        if not isinstance(header, dict):
            return Unrecognized(reason="schema_2_without_header")
        return V2Envelope(
            header=_validate_header(EventHeaderV2, header),
            event=envelope.raw_bytes("event"),
        )

    uuid = fields.get("uuid")
    if isinstance(uuid, str) and uuid:
        header_v1 = {name: fields[name] for name in _V1_HEADER_FIELDS if name in fields}
        return V1Envelope(
            header=_validate_header(EventHeaderV1, header_v1),
            event=envelope.raw_bytes("event"),
        )

    return Unrecognized(reason="unknown_envelope_shape")


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _validate_header(model: type[EventHeaderV2] | type[EventHeaderV1], data: dict[str, Any]) -> Any:
    """Valida o header; campos `null` valem como string vazia."""
    normalized = {key: "" if value is None else value for key, value in data.items()}
    try:
        return model.model_validate(normalized)
    except ValidationError as exc:
        raise InvalidJsonError("invalid_event_header") from exc
