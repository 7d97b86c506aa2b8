"""
Anthropic Messages API Field Mappers, Encoder and Decoder

Maps individual Messages API fields to their normalized equivalents, builds
Messages API request bodies and decodes complete (non-streaming) responses.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..config import get_settings
from ..events import MessageDeltaEvent
from ..exceptions import RequestValidationError
from ..ir import (
    FinishReason,
    NormalizedResponse,
    Role,
    TextPart,
    ThinkingPart,
    ToolCallPart,
    Usage,
)
from ..schemas import (
    AnthropicContentBlock,
    AnthropicMessage,
    AnthropicRequest,
    AnthropicTool,
    AnthropicToolChoice,
    GenerationOptions,
    Message,
    Tool,
    ToolChoice,
)

logger = logging.getLogger(__name__)

_FINISH_REASON_MAP: Dict[str, FinishReason] = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "pause_turn": FinishReason.STOP,
    "max_tokens": FinishReason.LENGTH,
    "tool_use": FinishReason.TOOL_USE,
    "refusal": FinishReason.ERROR,
}

_DATA_URL_RE = re.compile(r"^data:image/[^;]+;base64,")


# =============================================================================
# Field Mappers
# =============================================================================

def format_tool_choice(tool_choice: Optional[ToolChoice]) -> AnthropicToolChoice:
    """
    Encode a request-level tool choice in Messages API wire format.

    Args:
        tool_choice: None, a choice type string ("auto", "any", "none", ...)
            or a mapping/object naming a specific tool

    Returns:
        The wire-format tool choice; strings pass through unvalidated
    """
    if tool_choice is None:
        return {"type": "auto"}
    if isinstance(tool_choice, str):
        return {"type": tool_choice}
    if isinstance(tool_choice, Mapping):
        return {"type": "tool", "name": tool_choice["name"]}
    return {"type": "tool", "name": tool_choice.name}


def map_finish_reason(reason: Optional[str]) -> Optional[FinishReason]:
    """Map a Messages API stop reason to a FinishReason; None if unknown or absent."""
    if not reason:
        return None
    return _FINISH_REASON_MAP.get(reason)


def _safe_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def extract_usage_from_anthropic_event(event: MessageDeltaEvent) -> Optional[Usage]:
    """
    Extract the output-token count carried by a message_delta event.

    Returns None when the event has no usage field (or the usage has no
    output_tokens). A count of zero is returned as Usage(output_tokens=0).
    """
    if not isinstance(event, MessageDeltaEvent):
        raise TypeError(
            f"Usage is only carried by message_delta events, got {type(event).__name__}"
        )
    if event.usage is None:
        return None
    output_tokens = _safe_int(event.usage.get("output_tokens"))
    if output_tokens is None:
        return None
    return Usage(output_tokens=output_tokens)


def usage_from_envelope(usage: Optional[Mapping[str, Any]]) -> Usage:
    """Normalize the usage object of a message envelope (message_start or full response)."""
    if not usage:
        return Usage()
    return Usage(
        output_tokens=_safe_int(usage.get("output_tokens")),
        input_tokens=_safe_int(usage.get("input_tokens")),
        cache_creation_input_tokens=_safe_int(usage.get("cache_creation_input_tokens")),
        cache_read_input_tokens=_safe_int(usage.get("cache_read_input_tokens")),
    )


def map_role(role: Optional[str]) -> Role:
    """Map a Messages API role to a normalized Role."""
    role_map = {
        "user": Role.USER,
        "assistant": Role.ASSISTANT,
    }
    return role_map.get(role or "", Role.ASSISTANT)


# =============================================================================
# Decoder
# =============================================================================

class AnthropicMessagesDecoder:
    """Decodes complete Messages API responses to a NormalizedResponse."""

    def decode_response(self, payload: Dict[str, Any]) -> NormalizedResponse:
        """Decode a non-streaming Messages API response."""
        response = NormalizedResponse(
            id=payload.get("id", ""),
            model=payload.get("model", ""),
            role=map_role(payload.get("role")),
        )

        for block in payload.get("content") or []:
            part = self._decode_content_block(block, len(response.parts))
            if part is not None:
                response.parts.append(part)

        response.stop_reason = payload.get("stop_reason")
        response.finish_reason = map_finish_reason(response.stop_reason)
        response.stop_sequence = payload.get("stop_sequence")
        response.usage = usage_from_envelope(payload.get("usage"))

        return response

    def _decode_content_block(
        self, block: Dict[str, Any], index: int
    ) -> Optional[Union[TextPart, ToolCallPart, ThinkingPart]]:
        block_type = block.get("type", "text")

        if block_type == "text":
            return TextPart(index=index, text=block.get("text", ""), closed=True)

        elif block_type in ("tool_use", "server_tool_use"):
            # Same representation as a streamed call: raw JSON text
            return ToolCallPart(
                index=index,
                id=block.get("id", ""),
                name=block.get("name", ""),
                arguments=json.dumps(block.get("input") or {}, ensure_ascii=False),
                closed=True,
            )

        elif block_type == "thinking":
            return ThinkingPart(
                index=index,
                thinking=block.get("thinking", ""),
                signature=block.get("signature"),
                closed=True,
            )

        elif block_type == "redacted_thinking":
            return ThinkingPart(index=index, closed=True)

        logger.debug("Skipping unsupported response block type: %s", block_type)
        return None


# =============================================================================
# Encoder
# =============================================================================

class AnthropicMessagesEncoder:
    """Encodes caller messages and options to a Messages API request."""

    def encode_request(
        self, messages: List[Message], options: GenerationOptions
    ) -> AnthropicRequest:
        """
        Build a Messages API request body.

        Args:
            messages: Conversation messages, system messages included
            options: Generation options; model is required

        Returns:
            The request body, ready to be sent by the transport

        Raises:
            RequestValidationError: If model is missing or a message cannot be encoded
        """
        settings = get_settings()
        model = options.get("model")
        if not model:
            raise RequestValidationError("model", "model is required")

        system_message, anthropic_messages = self.transform_messages(messages)

        params: AnthropicRequest = {
            "model": model,
            "messages": anthropic_messages,
            "max_tokens": options.get("max_tokens") or settings.DEFAULT_MAX_TOKENS,
            "stream": options.get("stream", True),
        }

        if system_message:
            params["system"] = system_message

        for key in ("temperature", "top_p", "top_k", "stop_sequences"):
            value = options.get(key)
            if value is not None:
                params[key] = value

        tools = options.get("tools")
        if tools:
            params["tools"] = self.format_tools(tools)
            params["tool_choice"] = format_tool_choice(
                options.get("tool_choice") or settings.DEFAULT_TOOL_CHOICE
            )

        logger.debug(
            "Built Anthropic request: model=%s messages=%d tools=%d",
            model,
            len(anthropic_messages),
            len(tools or []),
        )
        return params

    def transform_messages(
        self, messages: List[Message]
    ) -> Tuple[str, List[AnthropicMessage]]:
        """Split out system text and encode the remaining messages."""
        system_messages: List[str] = []
        anthropic_messages: List[AnthropicMessage] = []

        for msg in messages:
            if msg.get("role") == "system":
                system_text = self._extract_text_content(msg.get("content"))
                if system_text:
                    system_messages.append(system_text)
                continue
            anthropic_messages.extend(self.transform_message(msg))

        return "\n\n".join(system_messages), anthropic_messages

    def transform_message(self, msg: Message) -> List[AnthropicMessage]:
        """Encode a single non-system message; tool messages may expand to several."""
        role = msg.get("role")

        if role == "tool":
            return [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": item["tool_call_id"],
                            "content": item["result"],
                        }
                    ],
                }
                for item in self._normalize_content(msg.get("content"))
                if item.get("type") == "tool_result"
            ]

        if role in ("user", "assistant"):
            blocks = self.build_content_blocks(msg)
            if not blocks:
                return []
            return [{"role": role, "content": blocks}]

        raise RequestValidationError(
            "role",
            "Unsupported message role for Anthropic provider. "
            "Supported roles: user, assistant, system, tool",
            value=role,
        )

    def build_content_blocks(self, msg: Message) -> List[AnthropicContentBlock]:
        """Encode message content (and assistant tool calls) as content blocks."""
        blocks: List[AnthropicContentBlock] = []
        content = self._normalize_content(msg.get("content"))

        for item in content:
            item_type = item.get("type")
            if item_type == "text":
                if item.get("text", "").strip():
                    blocks.append({"type": "text", "text": item["text"]})
            elif item_type == "image":
                image = item.get("image", "")
                if _DATA_URL_RE.match(image):
                    blocks.append(
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": self._detect_image_mime_type(image),
                                "data": _DATA_URL_RE.sub("", image, count=1),
                            },
                        }
                    )
                else:
                    logger.warning("Dropping image that is not a base64 data URL")
            elif item_type == "audio":
                raise RequestValidationError(
                    "content",
                    "Audio content is not supported by Anthropic provider",
                    value=item_type,
                )

        if msg.get("role") == "assistant":
            for tool_call in msg.get("tool_calls") or []:
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": tool_call["id"],
                        "name": tool_call["name"],
                        "input": tool_call.get("arguments") or {},
                    }
                )

        return blocks

    def format_tools(self, tools: List[Tool]) -> List[AnthropicTool]:
        """Encode tool declarations."""
        result = []
        for tool in tools:
            encoded: AnthropicTool = {
                "name": tool["name"],
                "input_schema": tool.get("parameters")
                or {"type": "object", "properties": {}},
            }
            if tool.get("description"):
                encoded["description"] = tool["description"]
            result.append(encoded)
        return result

    @staticmethod
    def _normalize_content(content: Any) -> List[Dict[str, Any]]:
        if content is None:
            return []
        if isinstance(content, str):
            return [{"type": "text", "text": content}]
        return list(content)

    def _extract_text_content(self, content: Any) -> str:
        texts = [
            item.get("text", "")
            for item in self._normalize_content(content)
            if item.get("type") == "text"
        ]
        return "\n\n".join(t for t in texts if t)

    @staticmethod
    def _detect_image_mime_type(data_url: str) -> str:
        if data_url.startswith("data:image/png"):
            return "image/png"
        if data_url.startswith("data:image/gif"):
            return "image/gif"
        if data_url.startswith("data:image/webp"):
            return "image/webp"
        return "image/jpeg"
