"""Cache em memória de um bearer token com margem de segurança.

O token é considerado válido apenas enquanto restar mais que `min_remaining`
segundos até a expiração; assim nunca entregamos um token que pode expirar
durante a chamada no lado do Feishu. Valor vazio é sempre inválido.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CredentialCache:
    """Slot único de credencial (sem persistência entre processos)."""

    __slots__ = ("_clock", "_expires_at", "_min_remaining", "_value")

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._value = ""
        self._expires_at = 0.0
        self._min_remaining = 0.0

    def set(self, value: str, lifetime_seconds: float, min_remaining_seconds: float) -> None:
        """Sobrescreve o slot inteiro com um novo token."""
        self._value = value
        self._expires_at = self._clock() + lifetime_seconds
        self._min_remaining = min_remaining_seconds

    def get(self) -> str:
        """Retorna o valor armazenado, mesmo se expirado."""
        return self._value

    def is_empty(self) -> bool:
        return self._value == ""

    def is_valid(self) -> bool:
        return self._clock() < self._expires_at - self._min_remaining
