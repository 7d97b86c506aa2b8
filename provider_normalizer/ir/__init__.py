"""
Normalized Representation Module

Provides the vendor-neutral response model produced by the normalizer.
"""

from .types import (
    # Core types
    NormalizedResponse,
    Usage,
    StreamChunk,
    # Content part types
    ContentPart,
    TextPart,
    ToolCallPart,
    ThinkingPart,
    # Enums
    Role,
    FinishReason,
    PartType,
)

__all__ = [
    # Core types
    "NormalizedResponse",
    "Usage",
    "StreamChunk",
    # Content part types
    "ContentPart",
    "TextPart",
    "ToolCallPart",
    "ThinkingPart",
    # Enums
    "Role",
    "FinishReason",
    "PartType",
]
