"""
Normalized Type Definitions

Vendor-neutral representation of a generated response, built either from a
complete Messages API response or incrementally from its stream events.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ToolArgumentsError


class Role(str, Enum):
    """Message roles understood by the normalizer."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FinishReason(str, Enum):
    """Normalized classification of why generation stopped."""
    STOP = "stop"
    LENGTH = "length"
    TOOL_USE = "tool_use"
    ERROR = "error"


class PartType(str, Enum):
    """Types of content parts in a normalized response."""
    TEXT = "text"
    TOOL_CALL = "tool_call"
    THINKING = "thinking"


@dataclass
class Usage:
    """
    Normalized token usage.

    Every field is None until the vendor reports it; zero is a reported value.
    """
    output_tokens: Optional[int] = None
    input_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None

    def merge(self, other: "Usage") -> None:
        """Overwrite fields with every value present in other."""
        for name in (
            "output_tokens",
            "input_tokens",
            "cache_creation_input_tokens",
            "cache_read_input_tokens",
        ):
            value = getattr(other, name)
            if value is not None:
                setattr(self, name, value)


@dataclass
class TextPart:
    """Accumulated text content part."""
    type: PartType = field(default=PartType.TEXT, init=False)
    index: int = 0
    text: str = ""
    closed: bool = False


@dataclass
class ToolCallPart:
    """Tool invocation part; arguments stay raw JSON text until parsed."""
    type: PartType = field(default=PartType.TOOL_CALL, init=False)
    index: int = 0
    id: str = ""
    name: str = ""
    arguments: str = ""
    closed: bool = False

    def parse_arguments(self) -> Dict[str, Any]:
        """
        Parse the accumulated argument text.

        Only valid once the block is closed. An empty argument string parses
        to an empty dict.

        Raises:
            ToolArgumentsError: If the block is still open or the text is not
                a JSON object
        """
        if not self.closed:
            raise ToolArgumentsError(
                f"Arguments for tool call '{self.name}' are still streaming",
                tool_name=self.name,
                raw_arguments=self.arguments,
            )
        if not self.arguments:
            return {}
        try:
            parsed = json.loads(self.arguments)
        except json.JSONDecodeError as e:
            raise ToolArgumentsError(
                f"Malformed arguments for tool call '{self.name}': {e}",
                tool_name=self.name,
                raw_arguments=self.arguments,
            ) from e
        if not isinstance(parsed, dict):
            raise ToolArgumentsError(
                f"Arguments for tool call '{self.name}' are not a JSON object",
                tool_name=self.name,
                raw_arguments=self.arguments,
            )
        return parsed


@dataclass
class ThinkingPart:
    """Extended thinking/reasoning content part."""
    type: PartType = field(default=PartType.THINKING, init=False)
    index: int = 0
    thinking: str = ""
    signature: Optional[str] = None
    closed: bool = False


# Union type for all content parts
ContentPart = Union[TextPart, ToolCallPart, ThinkingPart]


@dataclass
class NormalizedResponse:
    """
    Unified response representation.

    Parts are stored in vendor block-index order; parts[i].index == i.
    """
    id: str
    model: str
    role: Role = Role.ASSISTANT
    parts: List[ContentPart] = field(default_factory=list)
    finish_reason: Optional[FinishReason] = None
    # Vendor value as received; set even when finish_reason is None
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Usage = field(default_factory=Usage)

    def get_text_content(self) -> str:
        """Extract text content from all text parts."""
        return "".join(p.text for p in self.parts if isinstance(p, TextPart))

    def get_reasoning(self) -> str:
        """Extract reasoning from all thinking parts."""
        return "".join(p.thinking for p in self.parts if isinstance(p, ThinkingPart))

    def get_tool_calls(self) -> List[ToolCallPart]:
        """Extract all tool-call parts."""
        return [p for p in self.parts if isinstance(p, ToolCallPart)]


@dataclass
class StreamChunk:
    """
    Incremental view of a response while it streams.

    content and reasoning are cumulative; delta holds only the new text.
    """
    content: str
    delta: str = ""
    finish_reason: Optional[FinishReason] = None
    usage: Optional[Usage] = None
    reasoning: Optional[str] = None
    tool_calls: Optional[List[ToolCallPart]] = None
