"""Protocolos e contratos do core da aplicação."""

from .debug_logger import DebugLogger

__all__ = ["DebugLogger"]
