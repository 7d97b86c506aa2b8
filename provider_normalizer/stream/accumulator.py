"""
Stream Accumulator

Folds an ordered sequence of stream events into a single NormalizedResponse.

State machine: awaiting_start -> active -> closed. Every event received in a
state that does not accept it is a protocol violation, which also closes the
stream. Tool-call arguments are accumulated as raw JSON text; callers parse
them after the block is closed (ToolCallPart.parse_arguments).
"""

import dataclasses
import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..config import get_settings
from ..converters import (
    extract_usage_from_anthropic_event,
    map_finish_reason,
    map_role,
    usage_from_envelope,
)
from ..events import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    ContentBlockType,
    DeltaType,
    ErrorEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StreamEvent,
)
from ..exceptions import NormalizerError, ProtocolViolationError, StreamFailedError
from ..ir import (
    ContentPart,
    NormalizedResponse,
    StreamChunk,
    TextPart,
    ThinkingPart,
    ToolCallPart,
)

logger = logging.getLogger(__name__)


class StreamStatus(str, Enum):
    """Accumulator lifecycle states."""
    AWAITING_START = "awaiting_start"
    ACTIVE = "active"
    CLOSED = "closed"


# Part type each delta type may be applied to
_PART_FOR_DELTA = {
    DeltaType.TEXT: TextPart,
    DeltaType.INPUT_JSON: ToolCallPart,
    DeltaType.THINKING: ThinkingPart,
    DeltaType.SIGNATURE: ThinkingPart,
}


class StreamAccumulator:
    """
    Accumulates the events of one stream into a NormalizedResponse.

    One instance serves exactly one stream. process_event is the synchronous
    step; it returns a StreamChunk when the event changes caller-visible
    output (text, reasoning, finish reason) and None otherwise.
    """

    def __init__(self):
        self._status = StreamStatus.AWAITING_START
        self._response: Optional[NormalizedResponse] = None
        self._error: Optional[NormalizerError] = None

        # Cumulative text and reasoning for chunks
        self._content = ""
        self._reasoning = ""

        self._log_events = get_settings().LOG_STREAM_EVENTS

    @property
    def status(self) -> StreamStatus:
        return self._status

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def response(self) -> Optional[NormalizedResponse]:
        """The response accumulated so far; None before start or after a failure."""
        return self._response

    def process_event(self, event: StreamEvent) -> Optional[StreamChunk]:
        """
        Consume one event and update the response.

        Raises:
            ProtocolViolationError: If the event is invalid in the current state
            StreamFailedError: If the event is a vendor error event
        """
        if self._log_events:
            logger.debug("Stream event (%s): %r", self._status.value, event)

        if self._status == StreamStatus.CLOSED:
            raise self._violation("Stream is already closed", event)

        if self._status == StreamStatus.AWAITING_START:
            if not isinstance(event, MessageStartEvent):
                raise self._violation("Stream must begin with message_start", event)
            self._start_message(event)
            return None

        if isinstance(event, ContentBlockStartEvent):
            self._start_block(event)
            return None
        elif isinstance(event, ContentBlockDeltaEvent):
            return self._apply_block_delta(event)
        elif isinstance(event, ContentBlockStopEvent):
            self._open_part(event).closed = True
            return None
        elif isinstance(event, MessageDeltaEvent):
            return self._apply_message_delta(event)
        elif isinstance(event, MessageStopEvent):
            for part in self._response.parts:
                if not part.closed:
                    raise self._violation(f"Block {part.index} was never stopped", event)
            self._status = StreamStatus.CLOSED
            logger.debug(
                "Stream closed: id=%s parts=%d finish_reason=%s",
                self._response.id,
                len(self._response.parts),
                self._response.finish_reason,
            )
            return None
        elif isinstance(event, PingEvent):
            return None
        elif isinstance(event, ErrorEvent):
            raise self._fail(event)
        elif isinstance(event, MessageStartEvent):
            raise self._violation("Duplicate message_start", event)

        raise self._violation(f"Unknown stream event {type(event).__name__}", event)

    def consume(self, events: Iterable[StreamEvent]) -> NormalizedResponse:
        """Process every event in order and return the final response."""
        for event in events:
            self.process_event(event)
        return self.result()

    def result(self) -> NormalizedResponse:
        """
        Return the final response.

        Raises:
            StreamFailedError: If the vendor reported an error
            ProtocolViolationError: If the stream violated the protocol or has
                not reached message_stop yet
        """
        if self._error is not None:
            raise self._error
        if self._status != StreamStatus.CLOSED:
            raise ProtocolViolationError(
                "Stream has not reached message_stop",
                state=self._status.value,
            )
        return self._response

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _start_message(self, event: MessageStartEvent) -> None:
        self._response = NormalizedResponse(
            id=event.id,
            model=event.model,
            role=map_role(event.role),
            usage=usage_from_envelope(event.usage),
        )
        self._status = StreamStatus.ACTIVE

    def _start_block(self, event: ContentBlockStartEvent) -> None:
        parts = self._response.parts
        if event.index != len(parts):
            raise self._violation(
                f"Block index {event.index} out of order, expected {len(parts)}",
                event,
            )

        part: ContentPart
        if event.block_type == ContentBlockType.TOOL_USE:
            part = ToolCallPart(
                index=event.index, id=event.id or "", name=event.name or ""
            )
        elif event.block_type == ContentBlockType.THINKING:
            part = ThinkingPart(index=event.index)
        else:
            part = TextPart(index=event.index)
        parts.append(part)

    def _open_part(self, event) -> ContentPart:
        parts = self._response.parts
        if not 0 <= event.index < len(parts):
            raise self._violation(f"Block {event.index} was never started", event)
        part = parts[event.index]
        if part.closed:
            raise self._violation(f"Block {event.index} is already closed", event)
        return part

    def _apply_block_delta(self, event: ContentBlockDeltaEvent) -> Optional[StreamChunk]:
        part = self._open_part(event)
        try:
            delta_type = DeltaType(event.delta_type)
        except ValueError:
            raise self._violation(f"Unknown delta type {event.delta_type!r}", event)
        if not isinstance(part, _PART_FOR_DELTA[delta_type]):
            raise self._violation(
                f"{delta_type.value} cannot be applied to {part.type.value} block {event.index}",
                event,
            )

        if delta_type == DeltaType.TEXT:
            part.text += event.fragment
            self._content += event.fragment
            return StreamChunk(
                content=self._content,
                delta=event.fragment,
                tool_calls=self._closed_tool_calls(),
            )
        elif delta_type == DeltaType.INPUT_JSON:
            part.arguments += event.fragment
            return None
        elif delta_type == DeltaType.THINKING:
            part.thinking += event.fragment
            self._reasoning += event.fragment
            return StreamChunk(
                content=self._content,
                reasoning=self._reasoning,
                tool_calls=self._closed_tool_calls(),
            )

        part.signature = (part.signature or "") + event.fragment
        return None

    def _apply_message_delta(self, event: MessageDeltaEvent) -> Optional[StreamChunk]:
        response = self._response

        # Last write wins; absent values leave earlier ones untouched
        if event.stop_reason is not None:
            response.stop_reason = event.stop_reason
            response.finish_reason = map_finish_reason(event.stop_reason)
        if event.stop_sequence is not None:
            response.stop_sequence = event.stop_sequence

        usage = extract_usage_from_anthropic_event(event)
        if usage is not None:
            response.usage.merge(usage)

        if event.stop_reason is None:
            return None
        return StreamChunk(
            content=self._content,
            finish_reason=response.finish_reason,
            usage=dataclasses.replace(response.usage),
            tool_calls=self._closed_tool_calls(),
        )

    def _closed_tool_calls(self) -> Optional[List[ToolCallPart]]:
        calls = [p for p in self._response.get_tool_calls() if p.closed]
        return calls or None

    def _fail(self, event: ErrorEvent) -> StreamFailedError:
        error = StreamFailedError(event.error_type, event.message)
        logger.warning("Stream failed: %s", error.message)
        self._status = StreamStatus.CLOSED
        self._response = None
        self._error = error
        return error

    def _violation(self, message: str, event) -> ProtocolViolationError:
        error = ProtocolViolationError(
            message,
            event_type=getattr(getattr(event, "type", None), "value", None),
            event_index=getattr(event, "index", None),
            state=self._status.value,
        )
        logger.warning("Stream protocol violation: %s", message)
        # A finished stream keeps its outcome; late events only raise
        if self._status != StreamStatus.CLOSED:
            self._status = StreamStatus.CLOSED
            self._response = None
            self._error = error
        return error
