"""Verificação do verification token dos eventos."""

from __future__ import annotations

import hmac

from api.connectors.feishu.errors import SecurityError


def verify_event_token(received_token: str, expected_token: str) -> None:
    """Confere o token do evento com o configurado no app.

    Raises:
        SecurityError: Se os tokens não conferem
    """
    if not hmac.compare_digest(received_token.encode("utf-8"), expected_token.encode("utf-8")):
        raise SecurityError("unexpected_event_token")
