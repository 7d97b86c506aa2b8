"""
SSE Decoding and Stream Processing Unit Tests
"""

import json

import pytest

from provider_normalizer.exceptions import ProtocolViolationError, StreamFailedError
from provider_normalizer.ir import FinishReason
from provider_normalizer.stream import (
    SSEDecoder,
    StreamAccumulator,
    StreamStatus,
    aiter_data_lines,
    aprocess_anthropic_stream,
    iter_data_lines,
    process_anthropic_stream,
)
from tests.fixtures import (
    ANTHROPIC_ERROR_STREAM_EVENTS,
    ANTHROPIC_STREAM_EVENTS,
    ANTHROPIC_TOOL_STREAM_EVENTS,
)


def _sse_lines(events):
    lines = []
    for event in events:
        lines.append(f"event: {event['type']}")
        lines.append(f"data: {json.dumps(event)}")
        lines.append("")
    return lines


class TestSSEDecoder:
    """Tests for byte-level SSE decoding."""

    def test_splits_events(self):
        decoder = SSEDecoder()
        payloads = decoder.feed(
            b"event: ping\ndata: {\"type\":\"ping\"}\n\n"
            b"data: {\"type\":\"message_stop\"}\n\n"
        )
        assert payloads == ['{"type":"ping"}', '{"type":"message_stop"}']

    def test_keeps_incomplete_event(self):
        decoder = SSEDecoder()
        assert decoder.feed(b"data: {\"type\":") == []
        assert decoder.feed(b"\"ping\"}\n\n") == ['{"type":"ping"}']

    def test_crlf(self):
        decoder = SSEDecoder()
        assert decoder.feed(b"data: {\"type\":\"ping\"}\r\n\r\n") == ['{"type":"ping"}']

    def test_ignores_events_without_data(self):
        decoder = SSEDecoder()
        assert decoder.feed(b": keep-alive\n\n") == []

    def test_empty_chunk(self):
        assert SSEDecoder().feed(b"") == []

    def test_text_chunks(self):
        decoder = SSEDecoder()
        assert decoder.feed('data: {"type":"ping"}') == []
        assert decoder.feed("\n\n") == ['{"type":"ping"}']
        assert decoder.feed("") == []

    def test_split_crlf_and_utf8(self):
        decoder = SSEDecoder()
        raw = "data: caf\u00e9\r\n\r\n".encode("utf-8")
        # Split inside the two-byte character and between CR and LF
        assert decoder.feed(raw[:10]) == []
        assert decoder.feed(raw[10:12]) == []
        assert decoder.feed(raw[12:]) == ["caf\u00e9"]

    def test_multiline_data(self):
        decoder = SSEDecoder()
        assert decoder.feed("data: a\ndata:b\nid: 7\n\n") == ["a\nb"]


class TestIterDataLines:
    def test_extracts_data_payloads(self):
        lines = ["event: ping", 'data: {"type": "ping"}', "", "data: ", "data: [DONE]"]
        assert list(iter_data_lines(lines)) == ['{"type": "ping"}']

    @pytest.mark.asyncio
    async def test_async_variant(self):
        async def lines():
            for line in ["event: ping", 'data: {"type": "ping"}', "data: [DONE]"]:
                yield line

        assert [d async for d in aiter_data_lines(lines())] == ['{"type": "ping"}']


class TestProcessAnthropicStream:
    """Tests for driving the accumulator from SSE data."""

    def test_text_stream(self):
        acc = StreamAccumulator()
        chunks = list(
            process_anthropic_stream(iter_data_lines(_sse_lines(ANTHROPIC_STREAM_EVENTS)), acc)
        )

        assert [c.delta for c in chunks] == ["Hello", " there!", ""]
        assert chunks[-1].content == "Hello there!"
        assert chunks[-1].finish_reason == FinishReason.STOP
        assert acc.result().usage.output_tokens == 5

    def test_tool_stream(self):
        acc = StreamAccumulator()
        chunks = list(
            process_anthropic_stream(
                iter_data_lines(_sse_lines(ANTHROPIC_TOOL_STREAM_EVENTS)), acc
            )
        )

        assert len(chunks) == 2
        assert chunks[-1].tool_calls[0].parse_arguments() == {"location": "Paris"}
        assert acc.status == StreamStatus.CLOSED

    def test_invalid_json_is_skipped(self):
        data = [json.dumps(e) for e in ANTHROPIC_STREAM_EVENTS]
        data.insert(2, "{not json")
        data.insert(3, "[1, 2]")
        acc = StreamAccumulator()
        list(process_anthropic_stream(data, acc))
        assert acc.result().get_text_content() == "Hello there!"

    def test_stops_at_done_marker(self):
        data = [json.dumps(e) for e in ANTHROPIC_STREAM_EVENTS[:4]]
        data.append("[DONE]")
        data.append(json.dumps(ANTHROPIC_STREAM_EVENTS[4]))
        acc = StreamAccumulator()
        list(process_anthropic_stream(data, acc))
        assert acc.status == StreamStatus.ACTIVE

    def test_error_event_raises(self):
        data = [json.dumps(e) for e in ANTHROPIC_ERROR_STREAM_EVENTS]
        with pytest.raises(StreamFailedError, match="Overloaded"):
            list(process_anthropic_stream(data))

    def test_protocol_violation_raises(self):
        data = [json.dumps(e) for e in ANTHROPIC_STREAM_EVENTS[3:]]
        with pytest.raises(ProtocolViolationError):
            list(process_anthropic_stream(data))

    @pytest.mark.asyncio
    async def test_async_stream(self):
        async def lines():
            for line in _sse_lines(ANTHROPIC_STREAM_EVENTS):
                yield line

        acc = StreamAccumulator()
        chunks = [c async for c in aprocess_anthropic_stream(aiter_data_lines(lines()), acc)]

        assert chunks[-1].finish_reason == FinishReason.STOP
        assert acc.result().get_text_content() == "Hello there!"
