"""Criptografia dos eventos de webhook do Feishu (AES-256-CBC).

Formato recebido em `{"encrypt": "..."}`:
- base64 padrão de IV (16 bytes) || ciphertext
- chave = SHA-256 da encrypt key configurada (UTF-8)

O padding é removido pelo recorte entre o primeiro `{` e o último `}` do
plaintext, não por PKCS#7. É o comportamento que implantações existentes
esperam; não trocar.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from app.infra.crypto.constants import AES_BLOCK_SIZE
from app.infra.crypto.errors import CryptoError


def derive_event_key(encrypt_key: str) -> bytes:
    """Deriva a chave AES-256 a partir da encrypt key do app."""
    return hashlib.sha256(encrypt_key.encode("utf-8")).digest()


def _decode_base64(raw_value: str) -> bytes:
    try:
        return base64.b64decode(raw_value, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise CryptoError(f"Invalid base64 payload: {exc}") from exc


def trim_to_json_object(plaintext: bytes) -> bytes:
    """Recorta do primeiro `{` ao último `}` (inclusive).

    Sem `{` começa em 0; sem `}` vai até o fim do buffer.
    """
    left = plaintext.find(b"{")
    if left == -1:
        left = 0
    right = plaintext.rfind(b"}")
    if right == -1:
        right = len(plaintext) - 1
    return plaintext[left : right + 1]


def decrypt_event_payload(encrypted_b64: str, encrypt_key: str) -> bytes:
    """Descriptografa o campo `encrypt` e devolve o JSON em bytes.

    Raises:
        CryptoError: base64 inválido, menos de 16 bytes, ou ciphertext que
            não é múltiplo positivo do bloco.
    """
    data = _decode_base64(encrypted_b64)
    if len(data) < AES_BLOCK_SIZE:
        raise CryptoError("ciphertext too short")

    iv, ciphertext = data[:AES_BLOCK_SIZE], data[AES_BLOCK_SIZE:]
    if not ciphertext or len(ciphertext) % AES_BLOCK_SIZE != 0:
        raise CryptoError("ciphertext is not a multiple of the block size")

    decryptor = Cipher(algorithms.AES(derive_event_key(encrypt_key)), modes.CBC(iv)).decryptor()
    plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    return trim_to_json_object(plaintext)


def encrypt_event_payload(
    plaintext: bytes,
    encrypt_key: str,
    *,
    iv: bytes | None = None,
) -> str:
    """Gera o valor de `encrypt` como o Feishu envia (PKCS#7, IV prefixado).

    Útil para testes e ferramentas locais de replay de eventos.
    """
    iv = iv if iv is not None else os.urandom(AES_BLOCK_SIZE)
    if len(iv) != AES_BLOCK_SIZE:
        raise CryptoError(f"IV must be {AES_BLOCK_SIZE} bytes")

    padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(derive_event_key(encrypt_key)), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(iv + ciphertext).decode("ascii")
