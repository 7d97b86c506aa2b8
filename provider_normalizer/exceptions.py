"""
Normalizer Exceptions

Custom exceptions for stream protocol violations, vendor-reported stream
failures and request shaping errors.
"""

from typing import Any, Dict, Optional


class NormalizerError(Exception):
    """Base exception for normalizer errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error": "normalizer_error",
            "message": self.message,
            "field": self.field,
            "details": self.details,
        }


class ProtocolViolationError(NormalizerError):
    """
    Raised when a stream event is invalid for the current accumulator state.

    Examples:
    - Any event other than message_start before the stream started
    - A delta or stop for a block index that was never opened or is already closed
    - A content_block_start whose index is not the next one in sequence
    - Any event after the stream was closed
    """

    def __init__(
        self,
        message: str,
        event_type: Optional[str] = None,
        event_index: Optional[int] = None,
        state: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details or {})
        self.event_type = event_type
        self.event_index = event_index
        self.state = state

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "protocol_violation"
        result["event_type"] = self.event_type
        result["event_index"] = self.event_index
        result["state"] = self.state
        return result


class StreamFailedError(NormalizerError):
    """
    Raised when the vendor reports that generation failed mid-stream.

    The stream itself was well formed; the partial response is discarded.
    """

    def __init__(
        self,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=f"Anthropic API error: {error_type} - {message}",
            details=details or {},
        )
        self.error_type = error_type
        self.vendor_message = message

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "stream_failed"
        result["error_type"] = self.error_type
        result["vendor_message"] = self.vendor_message
        return result


class EventDecodeError(NormalizerError):
    """
    Raised when a vendor stream payload cannot be mapped to a stream event.

    Examples:
    - content_block_start with a block type the event model does not know
    - A block event without an integer index
    """

    def __init__(
        self,
        message: str,
        event_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details or {})
        self.event_type = event_type

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "event_decode_error"
        result["event_type"] = self.event_type
        return result


class ToolArgumentsError(NormalizerError):
    """Raised when accumulated tool-call arguments cannot be parsed."""

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        raw_arguments: Optional[str] = None,
    ):
        super().__init__(message=message, field="arguments")
        self.tool_name = tool_name
        self.raw_arguments = raw_arguments

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "tool_arguments_error"
        result["tool_name"] = self.tool_name
        result["raw_arguments"] = self.raw_arguments
        return result


class RequestValidationError(NormalizerError):
    """
    Raised when request shaping rejects the caller's input.

    Examples:
    - A message role the Messages API has no equivalent for
    - Audio content, which the Messages API does not accept
    """

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        full_message = f"Validation error for '{field}': {message}"
        super().__init__(message=full_message, field=field, details=details or {})
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["error"] = "validation_error"
        result["value"] = repr(self.value) if self.value is not None else None
        return result
