"""
Stream Module

Accumulates Messages API stream events into a NormalizedResponse and provides
the SSE plumbing to drive it from raw stream data.
"""

from .accumulator import StreamAccumulator, StreamStatus
from .processor import aprocess_anthropic_stream, process_anthropic_stream
from .sse import DONE_MARKER, SSEDecoder, aiter_data_lines, iter_data_lines

__all__ = [
    "StreamAccumulator",
    "StreamStatus",
    "SSEDecoder",
    "DONE_MARKER",
    "iter_data_lines",
    "aiter_data_lines",
    "process_anthropic_stream",
    "aprocess_anthropic_stream",
]
