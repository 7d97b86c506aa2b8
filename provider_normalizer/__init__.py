"""
Provider Normalizer

Converts Anthropic Messages API requests, responses and stream events into a
vendor-neutral model. Streaming events are folded into a single
NormalizedResponse by a StreamAccumulator.
"""

from .converters import (
    build_request_params,
    decode_response,
    extract_usage_from_anthropic_event,
    format_tool_choice,
    map_finish_reason,
)
from .events import StreamEvent, StreamEventType, decode_stream_event
from .exceptions import (
    EventDecodeError,
    NormalizerError,
    ProtocolViolationError,
    RequestValidationError,
    StreamFailedError,
    ToolArgumentsError,
)
from .ir import (
    FinishReason,
    NormalizedResponse,
    StreamChunk,
    TextPart,
    ThinkingPart,
    ToolCallPart,
    Usage,
)
from .logging_config import setup_logging
from .stream import (
    SSEDecoder,
    StreamAccumulator,
    StreamStatus,
    aprocess_anthropic_stream,
    iter_data_lines,
    process_anthropic_stream,
)

__version__ = "0.1.0"
__all__ = [
    # Field mappers
    "format_tool_choice",
    "map_finish_reason",
    "extract_usage_from_anthropic_event",
    # Request / response
    "build_request_params",
    "decode_response",
    # Stream
    "StreamAccumulator",
    "StreamStatus",
    "SSEDecoder",
    "iter_data_lines",
    "process_anthropic_stream",
    "aprocess_anthropic_stream",
    # Events
    "StreamEvent",
    "StreamEventType",
    "decode_stream_event",
    # Normalized types
    "NormalizedResponse",
    "StreamChunk",
    "TextPart",
    "ToolCallPart",
    "ThinkingPart",
    "Usage",
    "FinishReason",
    # Errors
    "NormalizerError",
    "ProtocolViolationError",
    "StreamFailedError",
    "EventDecodeError",
    "ToolArgumentsError",
    "RequestValidationError",
    # Logging
    "setup_logging",
]
