"""
Stream Event Decoder

Maps parsed Messages API stream payloads (JSON objects) to typed stream events.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..exceptions import EventDecodeError
from .types import (
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

logger = logging.getLogger(__name__)

# Vendor block types that stream with the same shape as a known block type
_BLOCK_TYPE_MAP = {
    "text": ContentBlockType.TEXT,
    "tool_use": ContentBlockType.TOOL_USE,
    "server_tool_use": ContentBlockType.TOOL_USE,
    "thinking": ContentBlockType.THINKING,
    "redacted_thinking": ContentBlockType.THINKING,
}

# Delta type -> field holding the fragment
_DELTA_FIELDS = {
    DeltaType.TEXT: "text",
    DeltaType.INPUT_JSON: "partial_json",
    DeltaType.THINKING: "thinking",
    DeltaType.SIGNATURE: "signature",
}


def _get_index(payload: Mapping[str, Any], event_type: str) -> int:
    index = payload.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        raise EventDecodeError(
            f"Event '{event_type}' has no integer block index",
            event_type=event_type,
            details={"index": index},
        )
    return index


def _get_dict(payload: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def decode_stream_event(payload: Mapping[str, Any]) -> Optional[StreamEvent]:
    """
    Decode a single stream payload to a typed event.

    Args:
        payload: Parsed JSON object of one SSE data line

    Returns:
        The typed event, or None for event and delta types the event model
        does not cover (the caller skips those)

    Raises:
        EventDecodeError: If a block event has no index or opens a block of
            unknown type
    """
    event_type = payload.get("type", "")

    if event_type == "message_start":
        message = _get_dict(payload, "message")
        usage = message.get("usage")
        return MessageStartEvent(
            id=message.get("id", ""),
            model=message.get("model", ""),
            role=message.get("role", "assistant"),
            usage=usage if isinstance(usage, dict) else None,
        )

    elif event_type == "content_block_start":
        index = _get_index(payload, event_type)
        block = _get_dict(payload, "content_block")
        raw_block_type = block.get("type", "text")
        block_type = _BLOCK_TYPE_MAP.get(raw_block_type)
        if block_type is None:
            raise EventDecodeError(
                f"Unknown content block type '{raw_block_type}' at index {index}",
                event_type=event_type,
                details={"index": index, "block_type": raw_block_type},
            )
        if block_type == ContentBlockType.TOOL_USE:
            return ContentBlockStartEvent(
                index=index,
                block_type=block_type,
                id=block.get("id", ""),
                name=block.get("name", ""),
            )
        return ContentBlockStartEvent(index=index, block_type=block_type)

    elif event_type == "content_block_delta":
        index = _get_index(payload, event_type)
        delta = _get_dict(payload, "delta")
        try:
            delta_type = DeltaType(delta.get("type", ""))
        except ValueError:
            logger.debug("Skipping unsupported delta type: %s", delta.get("type"))
            return None
        return ContentBlockDeltaEvent(
            index=index,
            delta_type=delta_type,
            fragment=delta.get(_DELTA_FIELDS[delta_type]) or "",
        )

    elif event_type == "content_block_stop":
        return ContentBlockStopEvent(index=_get_index(payload, event_type))

    elif event_type == "message_delta":
        delta = _get_dict(payload, "delta")
        usage = payload.get("usage")
        return MessageDeltaEvent(
            stop_reason=delta.get("stop_reason"),
            stop_sequence=delta.get("stop_sequence"),
            usage=usage if isinstance(usage, dict) else None,
        )

    elif event_type == "message_stop":
        return MessageStopEvent()

    elif event_type == "ping":
        return PingEvent()

    elif event_type == "error":
        error = _get_dict(payload, "error")
        return ErrorEvent(
            error_type=error.get("type", "error"),
            message=error.get("message", "Unknown error"),
        )

    logger.debug("Skipping unknown stream event type: %s", event_type)
    return None
