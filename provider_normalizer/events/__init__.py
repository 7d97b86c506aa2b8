"""
Stream Event Module

Typed model of the Messages API stream protocol and the decoder that builds
it from parsed payloads.
"""

from .types import (
    StreamEvent,
    MessageStartEvent,
    ContentBlockStartEvent,
    ContentBlockDeltaEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStopEvent,
    PingEvent,
    ErrorEvent,
    # Enums
    StreamEventType,
    ContentBlockType,
    DeltaType,
)
from .decoder import decode_stream_event

__all__ = [
    "StreamEvent",
    "MessageStartEvent",
    "ContentBlockStartEvent",
    "ContentBlockDeltaEvent",
    "ContentBlockStopEvent",
    "MessageDeltaEvent",
    "MessageStopEvent",
    "PingEvent",
    "ErrorEvent",
    # Enums
    "StreamEventType",
    "ContentBlockType",
    "DeltaType",
    # Decoding
    "decode_stream_event",
]
