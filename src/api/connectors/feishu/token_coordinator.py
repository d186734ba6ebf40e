"""Coordena o refresh de um slot de credencial.

Um único `asyncio.Lock` por slot cobre toda a sequência
"checar validade -> refresh -> gravar", então duas corrotinas nunca
disparam refresh simultâneo para o mesmo token.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.feishu.token_cache import CredentialCache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

# Feishu emite um token novo quando faltam menos de 30 minutos
TOKEN_MIN_REMAINING_SECONDS: float = 30 * 60


@dataclass(frozen=True, slots=True)
class TokenGrant:
    """Token emitido por um endpoint de credencial."""

    value: str
    expires_in: int


class TokenCoordinator:
    """Serve um token válido, renovando no máximo uma vez por vez."""

    def __init__(
        self,
        name: str,
        refresh: Callable[[], Awaitable[TokenGrant]],
        *,
        cache: CredentialCache | None = None,
        min_remaining_seconds: float = TOKEN_MIN_REMAINING_SECONDS,
    ) -> None:
        self.name = name
        self._refresh = refresh
        self._cache = cache or CredentialCache()
        self._min_remaining = min_remaining_seconds
        self._lock = asyncio.Lock()

    @property
    def cache(self) -> CredentialCache:
        return self._cache

    async def acquire(self) -> str:
        """Retorna o token em cache ou renova sob lock quando vencido.

        Raises:
            FeishuError: Se o refresh falhar (cache permanece intocado).
        """
        async with self._lock:
            if self._cache.is_empty() or not self._cache.is_valid():
                logger.debug("feishu_token_refresh", extra={"token_slot": self.name})
                grant = await self._refresh()
                self.store(grant)
            return self._cache.get()

    def store(self, grant: TokenGrant) -> None:
        """Grava um token recém-emitido com a margem fixa do slot."""
        self._cache.set(grant.value, grant.expires_in, self._min_remaining)
