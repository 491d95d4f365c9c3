"""
Tools Module - Tool definitions and argument models.
"""

from taskbridge.tools.registry import ToolDefinition, ToolRegistry, tool_registry
from taskbridge.tools.schemas import (
    ContextSetArguments,
    NaturalQueryArguments,
    NoArguments,
    RawCommandArguments,
    SmartAddArguments,
    TicketArguments,
    ToolArguments,
)

__all__ = [
    "ToolDefinition",
    "ToolRegistry",
    "tool_registry",
    "ToolArguments",
    "NoArguments",
    "NaturalQueryArguments",
    "RawCommandArguments",
    "ContextSetArguments",
    "SmartAddArguments",
    "TicketArguments",
]
