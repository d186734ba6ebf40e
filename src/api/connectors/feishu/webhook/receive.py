"""Parse e abertura (decrypt) do corpo do webhook.

O parse preserva, para cada membro de topo do envelope, o texto JSON
original. Assim o `event` chega aos handlers byte a byte como o Feishu
enviou, sem re-serialização.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from app.infra.crypto import CryptoError, decrypt_event_payload

_WHITESPACE = " \t\n\r"


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


@dataclass(frozen=True, slots=True)
class ParsedEnvelope:
    """Envelope decodificado + texto bruto de cada membro de topo."""

    fields: dict[str, Any]
    raw_members: dict[str, str] = field(default_factory=dict)

    def raw_bytes(self, name: str) -> bytes:
        return self.raw_members.get(name, "").encode("utf-8")


def parse_event_body(raw_body: bytes) -> ParsedEnvelope:
    """Parseia o corpo como objeto JSON.

    Aninhamento além do limite de recursão do interpretador conta como JSON
    inválido.

    Raises:
        InvalidJsonError: Corpo não é UTF-8, não é JSON ou não é objeto
    """
    try:
        text = raw_body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidJsonError("invalid_encoding") from exc

    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    try:
        raw_members = _raw_members(text)
    except RecursionError as exc:
        raise InvalidJsonError("invalid_json") from exc
    return ParsedEnvelope(fields=payload, raw_members=raw_members)


def open_envelope(envelope: ParsedEnvelope, encrypt_key: str) -> ParsedEnvelope:
    """Substitui o envelope pelo plaintext quando há campo `encrypt`.

    Executado uma única vez; o plaintext não é aberto de novo.

    Raises:
        CryptoError: ciphertext malformado
        InvalidJsonError: plaintext não é objeto JSON
    """
    encrypted = envelope.fields.get("encrypt")
    if not isinstance(encrypted, str) or not encrypted:
        return envelope
    plaintext = decrypt_event_payload(encrypted, encrypt_key)
    return parse_event_body(plaintext)


def _skip_ws(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in _WHITESPACE:
        idx += 1
    return idx


def _raw_members(text: str) -> dict[str, str]:
    """Fatia o texto de cada valor de topo (texto já validado por json.loads).

    Chaves duplicadas: vence a última, como em `json.loads`.
    """
    decoder = json.JSONDecoder()
    members: dict[str, str] = {}
    idx = _skip_ws(text, 0) + 1  # após "{"
    idx = _skip_ws(text, idx)
    if text[idx] == "}":
        return members

    while True:
        key, idx = decoder.raw_decode(text, idx)
        idx = _skip_ws(text, idx) + 1  # após ":"
        start = _skip_ws(text, idx)
        _, idx = decoder.raw_decode(text, start)
        members[key] = text[start:idx]
        idx = _skip_ws(text, idx)
        if text[idx] == "}":
            return members
        idx = _skip_ws(text, idx + 1)  # após ","


__all__ = [
    "CryptoError",
    "InvalidJsonError",
    "ParsedEnvelope",
    "WebhookRequestError",
    "open_envelope",
    "parse_event_body",
]
