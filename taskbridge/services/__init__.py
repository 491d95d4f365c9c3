"""
Services Module - Tool and prompt processing shared by every boundary.
"""

from taskbridge.services.prompt_service import PromptDefinition, PromptService, prompt_service
from taskbridge.services.tool_result import ToolErrorKind, ToolResult
from taskbridge.services.tool_service import ToolService, tool_service

__all__ = [
    "PromptDefinition",
    "PromptService",
    "prompt_service",
    "ToolErrorKind",
    "ToolResult",
    "ToolService",
    "tool_service",
]
