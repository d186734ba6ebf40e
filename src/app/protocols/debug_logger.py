"""Protocolo do logger de debug injetável no conector Feishu.

Qualquer `logging.Logger` satisfaz o contrato.
"""

from __future__ import annotations

from typing import Protocol


class DebugLogger(Protocol):
    """Contrato mínimo: uma linha de texto por chamada."""

    def debug(self, msg: str) -> None: ...
