"""
Command Handler - Handles direct Taskwarrior commands.

This handler is responsible for:
- task_raw: pass a command string straight to Taskwarrior
- task_context_set: define and activate a Taskwarrior context
- task_smart_add: add a task from structured fields
"""

import logging
from typing import List

from taskbridge.services.tool_handlers.base import HandlerContext, ToolHandler
from taskbridge.services.tool_result import ToolResult
from taskbridge.tools.schemas import (
    ContextSetArguments,
    RawCommandArguments,
    SmartAddArguments,
    ToolArguments,
)

logger = logging.getLogger("taskbridge.services.tool_handlers.command")


class CommandHandler(ToolHandler):
    """Handler for tools that map to a fixed Taskwarrior command shape."""

    @property
    def handler_name(self) -> str:
        return "command"

    @property
    def supported_tools(self) -> List[str]:
        return ["task_raw", "task_context_set", "task_smart_add"]

    async def handle(
        self,
        tool_name: str,
        arguments: ToolArguments,
        context: HandlerContext,
    ) -> ToolResult:
        self._log_entry(tool_name, context)

        if tool_name == "task_raw":
            result = await self._handle_raw(tool_name, arguments, context)
        elif tool_name == "task_context_set":
            result = await self._handle_context_set(tool_name, arguments, context)
        else:
            result = await self._handle_smart_add(tool_name, arguments, context)

        self._log_exit(tool_name, context, result)
        return result

    # -----------------------------------------------------------------------
    # TOOLS
    # -----------------------------------------------------------------------

    async def _handle_raw(
        self,
        tool_name: str,
        arguments: RawCommandArguments,
        context: HandlerContext,
    ) -> ToolResult:
        response = await context.executor.run_raw(arguments.command)
        return self._result(tool_name, response.stdout, context, data={"command": arguments.command})

    async def _handle_context_set(
        self,
        tool_name: str,
        arguments: ContextSetArguments,
        context: HandlerContext,
    ) -> ToolResult:
        name = arguments.context

        # Matches tasks in the project or carrying the tag of the same name
        definition = await context.executor.run_text(
            ["context", "define", name, f"project:{name}", "or", f"+{name}"]
        )
        await context.executor.run_text(["context", name])

        return self._result(tool_name, f"Context set to: {name}\n{definition}", context)

    async def _handle_smart_add(
        self,
        tool_name: str,
        arguments: SmartAddArguments,
        context: HandlerContext,
    ) -> ToolResult:
        args = self.build_smart_add_args(arguments)
        output = await context.executor.run_text(args)
        return self._result(
            tool_name,
            f"Task added successfully:\n{output}",
            context,
            data={"command": " ".join(args)},
        )

    @staticmethod
    def build_smart_add_args(arguments: SmartAddArguments) -> List[str]:
        """
        Build `add` arguments from structured fields.

        The description is passed as one argument, like the quoted
        description of `task add "..."`.
        """
        args = ["add", arguments.description]
        if arguments.project:
            args.append(f"project:{arguments.project}")
        if arguments.priority:
            args.append(f"priority:{arguments.priority}")
        if arguments.due:
            args.append(f"due:{arguments.due}")
        args.extend(f"+{tag}" for tag in arguments.tags)
        return args
