"""Helper para handlers: converte o `event` bruto no modelo tipado."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_event(raw_event: bytes, model: type[ModelT]) -> ModelT:
    """Valida o JSON bruto do evento.

    Uso:
        async def on_message(header: EventHeaderV2, event: bytes) -> None:
            received = parse_event(event, EventMessageReceived)

    Raises:
        pydantic.ValidationError: JSON inválido ou formato incompatível
    """
    return model.model_validate_json(raw_event)
