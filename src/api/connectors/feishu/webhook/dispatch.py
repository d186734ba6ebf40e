"""Execução destacada dos handlers de evento.

Cada evento casado vira uma task própria; a resposta HTTP nunca espera o
handler. Falhas vão para o hook `on_handler_error` em vez de sumirem.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from api.connectors.feishu.models import EventHeaderV1, EventHeaderV2

logger = logging.getLogger(__name__)


def log_handler_error(exc: BaseException, event_type: str) -> None:
    """Hook padrão: log estruturado da falha."""
    logger.error(
        "feishu_event_handler_failed",
        extra={
            "event_type": event_type,
            "error_type": type(exc).__name__,
        },
        exc_info=(type(exc), exc, exc.__traceback__),
    )


class HandlerDispatcher:
    """Agenda handlers em tasks e drena no shutdown."""

    def __init__(
        self,
        on_handler_error: Callable[[BaseException, str], None] | None = None,
    ) -> None:
        self._on_handler_error = on_handler_error or log_handler_error
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active_tasks)

    def dispatch(
        self,
        handler: Callable[[Any, bytes], Any],
        header: EventHeaderV2 | EventHeaderV1,
        event: bytes,
        event_type: str,
    ) -> asyncio.Task[Any]:
        """Agenda `handler(header, event)` sem aguardar."""
        task = asyncio.create_task(self._run(handler, header, event, event_type))
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)
        logger.info(
            "feishu_event_dispatched",
            extra={"event_type": event_type, "active_tasks": len(self._active_tasks)},
        )
        return task

    async def _run(
        self,
        handler: Callable[[Any, bytes], Any],
        header: EventHeaderV2 | EventHeaderV1,
        event: bytes,
        event_type: str,
    ) -> None:
        try:
            if inspect.iscoroutinefunction(handler):
                await handler(header, event)
            else:
                result = await asyncio.to_thread(handler, header, event)
                if inspect.isawaitable(result):
                    await result
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self._report(exc, event_type)

    def _report(self, exc: BaseException, event_type: str) -> None:
        try:
            self._on_handler_error(exc, event_type)
        except Exception:
            logger.exception("feishu_event_error_hook_failed", extra={"event_type": event_type})

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes; cancela o que passar do timeout."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "feishu_event_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "feishu_event_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
