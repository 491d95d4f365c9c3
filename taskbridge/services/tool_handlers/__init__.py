"""
Tool Handlers Package - Strategy pattern for tool processing.

Each handler serves a family of tools. ToolService validates arguments,
picks the handler whose supported_tools contains the tool name and
converts failures into error results.

Usage:
    from taskbridge.services.tool_handlers import ToolHandler, HandlerContext

    class MyHandler(ToolHandler):
        @property
        def handler_name(self) -> str:
            return "my_handler"

        @property
        def supported_tools(self) -> List[str]:
            return ["task_my_tool"]

        async def handle(self, tool_name, arguments, context) -> ToolResult:
            ...
"""

from taskbridge.services.tool_handlers.base import HandlerContext, ToolHandler
from taskbridge.services.tool_handlers.command_handler import CommandHandler
from taskbridge.services.tool_handlers.natural_handler import NaturalLanguageHandler
from taskbridge.services.tool_handlers.planning_handler import PlanningHandler
from taskbridge.services.tool_handlers.ticket_handler import TicketHandler

__all__ = [
    "HandlerContext",
    "ToolHandler",
    "CommandHandler",
    "NaturalLanguageHandler",
    "PlanningHandler",
    "TicketHandler",
]
