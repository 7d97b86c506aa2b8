"""
Converters Module

Field mappers plus request encoding and response decoding for the
Anthropic Messages API.
"""

from typing import Any, Dict, List

from ..ir import NormalizedResponse
from ..schemas import AnthropicRequest, GenerationOptions, Message

from .anthropic_messages import (
    AnthropicMessagesDecoder,
    AnthropicMessagesEncoder,
    extract_usage_from_anthropic_event,
    format_tool_choice,
    map_finish_reason,
    map_role,
    usage_from_envelope,
)

_ENCODER = AnthropicMessagesEncoder()
_DECODER = AnthropicMessagesDecoder()


def build_request_params(
    messages: List[Message], options: GenerationOptions
) -> AnthropicRequest:
    """
    Build a Messages API request body from caller messages and options.

    Raises:
        RequestValidationError: If the input cannot be expressed in the Messages API
    """
    return _ENCODER.encode_request(messages, options)


def decode_response(payload: Dict[str, Any]) -> NormalizedResponse:
    """Decode a complete (non-streaming) Messages API response."""
    return _DECODER.decode_response(payload)


__all__ = [
    "AnthropicMessagesDecoder",
    "AnthropicMessagesEncoder",
    "build_request_params",
    "decode_response",
    "extract_usage_from_anthropic_event",
    "format_tool_choice",
    "map_finish_reason",
    "map_role",
    "usage_from_envelope",
]
