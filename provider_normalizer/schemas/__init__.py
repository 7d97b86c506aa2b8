"""
Protocol Schemas Module

Defines TypedDict schemas for the caller-side request input and the Messages
API request payload produced from it.
"""

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union


# =============================================================================
# Caller-side Input Types
# =============================================================================

class TextContent(TypedDict):
    """Text content item."""
    type: Literal["text"]
    text: str


class ImageContent(TypedDict):
    """Image content item; image is a base64 data URL."""
    type: Literal["image"]
    image: str


class AudioContent(TypedDict, total=False):
    """Audio content item."""
    type: Literal["audio"]
    audio: str
    format: str


class ToolResultContent(TypedDict):
    """Result of a tool call, sent back in a tool message."""
    type: Literal["tool_result"]
    tool_call_id: str
    result: str


Content = Union[TextContent, ImageContent, AudioContent, ToolResultContent]


class ToolCall(TypedDict):
    """Tool call made by the assistant in an earlier turn."""
    id: str
    name: str
    arguments: Dict[str, Any]


class Message(TypedDict, total=False):
    """Conversation message."""
    role: Literal["system", "user", "assistant", "tool"]
    content: Union[str, List[Content]]
    tool_calls: List[ToolCall]


class Tool(TypedDict, total=False):
    """Tool declaration; parameters is a JSON Schema object."""
    name: str
    description: str
    parameters: Dict[str, Any]


class NamedToolChoice(TypedDict):
    """Force the model to call one tool."""
    name: str


ToolChoice = Union[str, NamedToolChoice]


class GenerationOptions(TypedDict, total=False):
    """Generation options accepted by build_request_params."""
    model: str
    max_tokens: int
    temperature: float
    top_p: float
    top_k: int
    stop_sequences: List[str]
    tools: List[Tool]
    tool_choice: Optional[ToolChoice]
    stream: bool


# =============================================================================
# Anthropic Messages Types
# =============================================================================

class AnthropicTool(TypedDict, total=False):
    """Anthropic tool definition."""
    name: str
    description: str
    input_schema: Dict[str, Any]


class AnthropicToolChoice(TypedDict, total=False):
    """Anthropic tool choice."""
    type: str  # "auto", "any", "none", "tool"
    name: str


class AnthropicTextBlock(TypedDict):
    type: Literal["text"]
    text: str


class AnthropicImageSource(TypedDict):
    type: Literal["base64"]
    media_type: str
    data: str


class AnthropicImageBlock(TypedDict):
    type: Literal["image"]
    source: AnthropicImageSource


class AnthropicToolUseBlock(TypedDict):
    type: Literal["tool_use"]
    id: str
    name: str
    input: Dict[str, Any]


class AnthropicToolResultBlock(TypedDict):
    type: Literal["tool_result"]
    tool_use_id: str
    content: str


AnthropicContentBlock = Union[
    AnthropicTextBlock,
    AnthropicImageBlock,
    AnthropicToolUseBlock,
    AnthropicToolResultBlock,
]


class AnthropicMessage(TypedDict):
    """Anthropic message."""
    role: Literal["user", "assistant"]
    content: List[AnthropicContentBlock]


class AnthropicRequest(TypedDict, total=False):
    """Anthropic Messages API request."""
    model: str
    messages: List[AnthropicMessage]
    max_tokens: int
    system: str
    temperature: float
    top_p: float
    top_k: int
    stop_sequences: List[str]
    tools: List[AnthropicTool]
    tool_choice: AnthropicToolChoice
    stream: bool
