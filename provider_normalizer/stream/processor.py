"""
Anthropic Stream Processing

Drives a StreamAccumulator from SSE data payloads, yielding stream chunks as
the response grows.
"""

import json
import logging
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional

from ..events import StreamEvent, decode_stream_event
from ..ir import StreamChunk
from .accumulator import StreamAccumulator
from .sse import DONE_MARKER

logger = logging.getLogger(__name__)


def _decode_data(data: str) -> Optional[StreamEvent]:
    try:
        payload = json.loads(data)
    except json.JSONDecodeError:
        logger.warning("Skipping stream payload that is not valid JSON: %.200s", data)
        return None
    if not isinstance(payload, dict):
        logger.warning("Skipping stream payload that is not a JSON object")
        return None
    return decode_stream_event(payload)


def process_anthropic_stream(
    data_lines: Iterable[str],
    accumulator: Optional[StreamAccumulator] = None,
) -> Iterator[StreamChunk]:
    """
    Feed SSE data payloads through an accumulator.

    Args:
        data_lines: JSON payloads of the stream's data lines (see iter_data_lines)
        accumulator: Accumulator to drive; pass one in to read the final
            response with accumulator.result() afterwards

    Yields:
        Chunks for text, reasoning and finish-reason updates

    Raises:
        ProtocolViolationError: If the events break the stream protocol
        StreamFailedError: If the vendor reports an error event
    """
    accumulator = accumulator if accumulator is not None else StreamAccumulator()

    for data in data_lines:
        if data.strip() == DONE_MARKER:
            break
        event = _decode_data(data)
        if event is None:
            continue
        chunk = accumulator.process_event(event)
        if chunk is not None:
            yield chunk


async def aprocess_anthropic_stream(
    data_lines: AsyncIterable[str],
    accumulator: Optional[StreamAccumulator] = None,
) -> AsyncIterator[StreamChunk]:
    """Async counterpart of process_anthropic_stream."""
    accumulator = accumulator if accumulator is not None else StreamAccumulator()

    async for data in data_lines:
        if data.strip() == DONE_MARKER:
            break
        event = _decode_data(data)
        if event is None:
            continue
        chunk = accumulator.process_event(event)
        if chunk is not None:
            yield chunk
