"""
Stream Event Type Definitions

One dataclass per lifecycle signal of the Messages API stream protocol.
StreamEvent is the closed union of these variants.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class StreamEventType(str, Enum):
    """Types of streaming events."""
    # Message-level events
    MESSAGE_START = "message_start"
    MESSAGE_DELTA = "message_delta"
    MESSAGE_STOP = "message_stop"
    # Content block events
    CONTENT_BLOCK_START = "content_block_start"
    CONTENT_BLOCK_DELTA = "content_block_delta"
    CONTENT_BLOCK_STOP = "content_block_stop"
    # Utility events
    PING = "ping"
    ERROR = "error"


class ContentBlockType(str, Enum):
    """Types of streamed content blocks."""
    TEXT = "text"
    TOOL_USE = "tool_use"
    THINKING = "thinking"


class DeltaType(str, Enum):
    """Types of content block deltas."""
    TEXT = "text_delta"
    INPUT_JSON = "input_json_delta"
    THINKING = "thinking_delta"
    SIGNATURE = "signature_delta"


@dataclass
class MessageStartEvent:
    """Opens the stream with the message envelope."""
    type: StreamEventType = field(default=StreamEventType.MESSAGE_START, init=False)
    id: str = ""
    model: str = ""
    role: str = "assistant"
    usage: Optional[Dict[str, Any]] = None


@dataclass
class ContentBlockStartEvent:
    """Opens content block `index`."""
    type: StreamEventType = field(default=StreamEventType.CONTENT_BLOCK_START, init=False)
    index: int = 0
    block_type: ContentBlockType = ContentBlockType.TEXT
    # tool_use only
    id: Optional[str] = None
    name: Optional[str] = None


@dataclass
class ContentBlockDeltaEvent:
    """Appends a text, JSON, thinking or signature fragment to block `index`."""
    type: StreamEventType = field(default=StreamEventType.CONTENT_BLOCK_DELTA, init=False)
    index: int = 0
    delta_type: DeltaType = DeltaType.TEXT
    fragment: str = ""


@dataclass
class ContentBlockStopEvent:
    type: StreamEventType = field(default=StreamEventType.CONTENT_BLOCK_STOP, init=False)
    index: int = 0


@dataclass
class MessageDeltaEvent:
    """Top-level message changes: stop reason and cumulative output usage."""
    type: StreamEventType = field(default=StreamEventType.MESSAGE_DELTA, init=False)
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


@dataclass
class MessageStopEvent:
    type: StreamEventType = field(default=StreamEventType.MESSAGE_STOP, init=False)


@dataclass
class PingEvent:
    type: StreamEventType = field(default=StreamEventType.PING, init=False)


@dataclass
class ErrorEvent:
    """Vendor-reported failure (e.g. overloaded_error)."""
    type: StreamEventType = field(default=StreamEventType.ERROR, init=False)
    error_type: str = "error"
    message: str = "Unknown error"


# Union type for all stream events
StreamEvent = Union[
    MessageStartEvent,
    ContentBlockStartEvent,
    ContentBlockDeltaEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStopEvent,
    PingEvent,
    ErrorEvent,
]
