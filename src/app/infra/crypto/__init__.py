"""Criptografia de eventos de webhook do Feishu.

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/ (exceto via bootstrap)
- api/connectors/feishu/webhook usa este módulo para abrir envelopes `encrypt`
"""

from .constants import AES_BLOCK_SIZE, AES_KEY_SIZE
from .errors import CryptoError
from .event_encryption import (
    decrypt_event_payload,
    derive_event_key,
    encrypt_event_payload,
    trim_to_json_object,
)

__all__ = [
    "AES_BLOCK_SIZE",
    "AES_KEY_SIZE",
    "CryptoError",
    "decrypt_event_payload",
    "derive_event_key",
    "encrypt_event_payload",
    "trim_to_json_object",
]
