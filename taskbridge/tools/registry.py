"""
Tool Registry - Centralized tool definitions and argument validation.

This module provides a registry of every tool the bridge exposes, with its
description, argument model and examples.

Purpose:
========
1. Single source of truth for tool names and schemas (MCP and HTTP share it)
2. Argument validation before any Taskwarrior command runs
3. Documentation of tool capabilities

Usage:
======
```python
from taskbridge.tools.registry import tool_registry

if tool_registry.has_tool("task_natural"):
    arguments = tool_registry.validate("task_natural", {"query": "show tasks"})

schemas = [tool.input_schema for tool in tool_registry.list_tools()]
```
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError

from taskbridge.core.errors import InvalidToolArguments, UnknownToolError
from taskbridge.tools.schemas import (
    ContextSetArguments,
    NaturalQueryArguments,
    NoArguments,
    RawCommandArguments,
    SmartAddArguments,
    TicketArguments,
    ToolArguments,
)

logger = logging.getLogger("taskbridge.tools.registry")


# ---------------------------------------------------------------------------
# TOOL DEFINITION
# ---------------------------------------------------------------------------

@dataclass
class ToolDefinition:
    """
    Definition of a tool exposed to callers.

    Attributes:
        name: Unique tool identifier (e.g., "task_natural")
        description: Human/LLM-readable description
        arguments_model: Pydantic model the arguments must satisfy
        examples: Example invocations
    """
    name: str
    description: str
    arguments_model: Type[ToolArguments] = NoArguments
    examples: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for the arguments, as advertised to MCP clients."""
        schema = self.arguments_model.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        schema["type"] = "object"
        return schema

    def validate(self, arguments: Optional[Dict[str, Any]]) -> ToolArguments:
        """
        Validate raw arguments.

        Raises:
            InvalidToolArguments: with a readable summary of every problem
        """
        try:
            return self.arguments_model.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
                for error in e.errors()
            )
            raise InvalidToolArguments(self.name, problems) from e


# ---------------------------------------------------------------------------
# TOOL REGISTRY
# ---------------------------------------------------------------------------

class ToolRegistry:
    """
    Registry of all tools the bridge exposes.

    Tools are listed in registration order.
    """

    def __init__(self):
        """Initialize the registry with built-in tools."""
        self._tools: Dict[str, ToolDefinition] = {}
        self._register_builtin_tools()
        logger.debug(f"Tool registry initialized with {len(self._tools)} tools")

    def _register_builtin_tools(self) -> None:
        self.register(ToolDefinition(
            name="task_natural",
            description=(
                "Execute Taskwarrior commands using natural language. Examples: "
                '"add fix the login bug", "show tasks for today", "what should I work on next", '
                '"mark task 5 as done", "list urgent tasks"'
            ),
            arguments_model=NaturalQueryArguments,
            examples=[{"query": "add fix the login bug"}, {"query": "list urgent tasks"}],
        ))

        self.register(ToolDefinition(
            name="task_raw",
            description="Execute raw Taskwarrior commands for advanced users",
            arguments_model=RawCommandArguments,
            examples=[{"command": "project:web list"}],
        ))

        self.register(ToolDefinition(
            name="task_context_set",
            description="Set the current project/context for task operations",
            arguments_model=ContextSetArguments,
            examples=[{"context": "DRX-12345"}],
        ))

        self.register(ToolDefinition(
            name="task_smart_add",
            description="Add a task with intelligent parsing of priority, due dates, projects, and tags",
            arguments_model=SmartAddArguments,
            examples=[{"description": "Review MR", "priority": "H", "due": "tomorrow", "tags": ["review"]}],
        ))

        self.register(ToolDefinition(
            name="task_eisenhower",
            description="Get tasks organized by Eisenhower Matrix (Urgent/Important quadrants)",
        ))

        self.register(ToolDefinition(
            name="task_ticket_sync",
            description="Sync tasks from a ticket checklist to Taskwarrior",
            arguments_model=TicketArguments,
            examples=[{"ticket": "DRX-12345"}],
        ))

        self.register(ToolDefinition(
            name="task_where_am_i",
            description="Get current context and suggested next actions based on project state",
        ))

    def register(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            logger.warning(f"Overwriting tool definition: {tool.name}")
        self._tools[tool.name] = tool

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def get_tool(self, name: str) -> ToolDefinition:
        """
        Raises:
            UnknownToolError: if no tool has that name
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def list_tools(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def validate(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolArguments:
        return self.get_tool(name).validate(arguments)


tool_registry = ToolRegistry()
