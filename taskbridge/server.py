"""
MCP Server - Exposes the Taskwarrior tools and review prompts over stdio.

Tools:
- task_natural: natural-language task requests
- task_raw: raw Taskwarrior commands
- task_context_set: define and switch a Taskwarrior context
- task_smart_add: add a task from structured fields
- task_eisenhower: tasks by Eisenhower quadrant
- task_ticket_sync: import a ticket's checklist as tasks
- task_where_am_i: detected context and suggested actions

Prompts:
- daily_review
- weekly_planning

Run with: taskbridge-mcp  (or python -m taskbridge)
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    CallToolRequest,
    CallToolResult,
    ErrorData,
    GetPromptResult,
    Prompt,
    PromptMessage,
    ServerResult,
    TextContent,
    Tool,
)

from taskbridge.context.detector import context_detector
from taskbridge.core.config import settings
from taskbridge.core.errors import TaskwarriorError, UnknownPromptError
from taskbridge.monitoring.logger import configure_logging
from taskbridge.services.prompt_service import prompt_service
from taskbridge.services.tool_result import ToolErrorKind, ToolResult
from taskbridge.services.tool_service import tool_service
from taskbridge.tools.registry import tool_registry

logger = logging.getLogger("taskbridge.server")

ERROR_CODES = {
    ToolErrorKind.INVALID_ARGUMENTS: INVALID_PARAMS,
    ToolErrorKind.UNKNOWN_TOOL: METHOD_NOT_FOUND,
    ToolErrorKind.EXECUTION: INTERNAL_ERROR,
    ToolErrorKind.INTERNAL: INTERNAL_ERROR,
}


app = Server(settings.APP_NAME, version=settings.APP_VERSION)


def to_mcp_error(result: ToolResult) -> McpError:
    code = ERROR_CODES.get(result.error_kind, INTERNAL_ERROR)
    return McpError(ErrorData(code=code, message=result.text))


@app.list_tools()
async def list_tools() -> List[Tool]:
    """List available tools"""
    return [
        Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.input_schema,
        )
        for tool in tool_registry.list_tools()
    ]


async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
    """
    Run a tool.

    Raises:
        McpError: with the code matching the failure category
    """
    result = await tool_service.call(name, arguments)
    if not result.success:
        raise to_mcp_error(result)
    return [TextContent(type="text", text=result.text)]


async def handle_call_tool(request: CallToolRequest) -> ServerResult:
    # Not registered through @app.call_tool(): that decorator converts a raised
    # McpError into an isError result instead of a JSON-RPC error.
    content = await call_tool(request.params.name, request.params.arguments)
    return ServerResult(CallToolResult(content=content, isError=False))


app.request_handlers[CallToolRequest] = handle_call_tool


@app.list_prompts()
async def list_prompts() -> List[Prompt]:
    return [
        Prompt(name=prompt.name, description=prompt.description, arguments=[])
        for prompt in prompt_service.list_prompts()
    ]


@app.get_prompt()
async def get_prompt(name: str, arguments: Optional[Dict[str, str]] = None) -> GetPromptResult:
    try:
        definition = prompt_service.get_prompt(name)
        text = await prompt_service.render(name)
    except UnknownPromptError as e:
        raise McpError(ErrorData(code=INVALID_REQUEST, message=str(e))) from e
    except TaskwarriorError as e:
        raise McpError(ErrorData(code=INTERNAL_ERROR, message=str(e))) from e

    return GetPromptResult(
        description=definition.description,
        messages=[
            PromptMessage(role="user", content=TextContent(type="text", text=text)),
        ],
    )


async def serve() -> None:
    """Detect the starting context, then serve MCP over stdio until EOF."""
    context = await context_detector.detect_context()
    logger.info(f"Starting {settings.APP_NAME} in {context.current_project or 'no project'}")

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Taskwarrior AI Bridge running on stdio")
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(serve())


if __name__ == "__main__":
    main()
