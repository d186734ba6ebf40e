"""Webhook Feishu: parse, decrypt, classificação, verificação e dispatch."""

from .dispatch import HandlerDispatcher, log_handler_error
from .envelope import (
    InboundEnvelope,
    Unrecognized,
    V1Envelope,
    V2Envelope,
    VerificationPing,
    classify_envelope,
)
from .events import parse_event
from .ingestor import EventIngestor, IngestOutcome, IngestResult
from .receive import (
    CryptoError,
    InvalidJsonError,
    ParsedEnvelope,
    WebhookRequestError,
    open_envelope,
    parse_event_body,
)
from .registry import EventHandler, EventHandlerV1, HandlerRegistry
from .verify import verify_event_token

__all__ = [
    "CryptoError",
    "EventHandler",
    "EventHandlerV1",
    "EventIngestor",
    "HandlerDispatcher",
    "HandlerRegistry",
    "InboundEnvelope",
    "IngestOutcome",
    "IngestResult",
    "InvalidJsonError",
    "ParsedEnvelope",
    "Unrecognized",
    "V1Envelope",
    "V2Envelope",
    "VerificationPing",
    "WebhookRequestError",
    "classify_envelope",
    "log_handler_error",
    "open_envelope",
    "parse_event",
    "parse_event_body",
    "verify_event_token",
]
