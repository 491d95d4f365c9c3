"""
Tool Result Types - Shared data structures for tool processing.

This module contains the result type used by ToolService and the tool
handlers. Kept separate to avoid circular imports between tool_service.py
and the handlers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ToolErrorKind(str, Enum):
    """Why a tool call failed."""
    INVALID_ARGUMENTS = "invalid_arguments"
    UNKNOWN_TOOL = "unknown_tool"
    EXECUTION = "execution"
    INTERNAL = "internal"


@dataclass
class ToolResult:
    """
    Result of one tool call.

    Boundaries (MCP server, HTTP router) turn this into their own response
    format.

    Attributes:
        success: Whether the tool completed
        tool_name: Tool that was called
        text: Text payload returned to the caller (error message on failure)
        data: Structured extras (synthesized command, ticket results, ...)
        error_kind: Failure category, None on success
        processing_time_ms: Processing time in milliseconds
        request_id: Unique request identifier for tracing
    """
    success: bool
    tool_name: str
    text: str = ""
    data: Optional[Dict[str, Any]] = None
    error_kind: Optional[ToolErrorKind] = None
    processing_time_ms: float = 0.0
    request_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for response."""
        return {
            "success": self.success,
            "tool_name": self.tool_name,
            "text": self.text,
            "data": self.data,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "processing_time_ms": self.processing_time_ms,
            "request_id": self.request_id,
        }
