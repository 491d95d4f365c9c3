"""
Ticket Handler - Handles ticket-aware tools.

This handler is responsible for:
- task_ticket_sync: import open checklist/TODO items of a ticket as tasks
- task_where_am_i: report the detected context, its tasks and known tickets

Ticket sync is best effort: every task is added on its own, and one
failed add is reported inline without stopping the rest.
"""

import logging
from typing import List

from taskbridge.core.errors import TaskwarriorError
from taskbridge.intent.synthesizer import tokenize
from taskbridge.services.tool_handlers.base import HandlerContext, ToolHandler
from taskbridge.services.tool_result import ToolResult
from taskbridge.tools.schemas import TicketArguments, ToolArguments

logger = logging.getLogger("taskbridge.services.tool_handlers.ticket")

SUGGESTED_ACTIONS = (
    "Suggested actions:\n"
    '- Use "task_natural" with queries like "what should I work on next"\n'
    '- Use "task_ticket_sync" to import tasks from a ticket\n'
    '- Use "task_smart_add" to add context-aware tasks'
)


class TicketHandler(ToolHandler):
    """Handler for ticket import and context reporting."""

    @property
    def handler_name(self) -> str:
        return "ticket"

    @property
    def supported_tools(self) -> List[str]:
        return ["task_ticket_sync", "task_where_am_i"]

    async def handle(
        self,
        tool_name: str,
        arguments: ToolArguments,
        context: HandlerContext,
    ) -> ToolResult:
        self._log_entry(tool_name, context)

        if tool_name == "task_ticket_sync":
            result = await self._handle_ticket_sync(tool_name, arguments, context)
        else:
            result = await self._handle_where_am_i(tool_name, context)

        self._log_exit(tool_name, context, result)
        return result

    # -----------------------------------------------------------------------
    # TICKET SYNC
    # -----------------------------------------------------------------------

    async def _handle_ticket_sync(
        self,
        tool_name: str,
        arguments: TicketArguments,
        context: HandlerContext,
    ) -> ToolResult:
        ticket = arguments.ticket
        detector = context.detector

        await detector.detect_context()
        project_context = detector.set_current_ticket(ticket)

        tasks = await detector.get_ticket_tasks(ticket, project_context)
        if not tasks:
            hint = f"{detector.config.TICKETS_DIR}/{ticket}/{detector.config.CHECKLIST_FILE}"
            return self._result(
                tool_name,
                f"No tasks found for ticket {ticket}. Make sure {hint} exists.",
                context,
                data={"ticket": ticket, "added": [], "failed": []},
            )

        lines = []
        added = []
        failed = []
        for description in tasks:
            enhanced = detector.enhance_task_description(description, project_context)
            try:
                await context.executor.execute(["add", *tokenize(enhanced)])
            except TaskwarriorError as e:
                logger.warning(f"[{context.request_id}] Failed to add {description!r}: {e}")
                lines.append(f"✗ Failed: {description} - {e}")
                failed.append(description)
                continue
            lines.append(f"✓ Added: {description}")
            added.append(description)

        return self._result(
            tool_name,
            f"Synced tasks for {ticket}:\n" + "\n".join(lines),
            context,
            data={"ticket": ticket, "added": added, "failed": failed},
        )

    # -----------------------------------------------------------------------
    # WHERE AM I
    # -----------------------------------------------------------------------

    async def _handle_where_am_i(self, tool_name: str, context: HandlerContext) -> ToolResult:
        detector = context.detector
        project_context = await detector.detect_context()

        context_lines = []
        if project_context.current_ticket:
            context_lines.append(f"Current Ticket: {project_context.current_ticket}")
        if project_context.current_project:
            context_lines.append(f"Current Project: {project_context.current_project}")
        if project_context.workspace_path:
            context_lines.append(f"Workspace: {project_context.workspace_path}")

        if project_context.current_ticket:
            task_args = [f"+{project_context.current_ticket}", "list"]
        elif project_context.current_project:
            task_args = [f"project:{project_context.current_project}", "list"]
        else:
            task_args = ["next", "limit:5"]
        task_list = await context.executor.run_text(task_args)

        tickets = await detector.list_tickets(project_context)
        ticket_info = ""
        if tickets:
            ticket_info = "\nAvailable Tickets:\n" + "\n".join(f"  - {t}" for t in tickets)

        text = (
            "Current Context:\n" + "\n".join(context_lines) + "\n\n"
            + f"Tasks for current context:\n{task_list}"
            + ticket_info
            + "\n\n" + SUGGESTED_ACTIONS
        )
        return self._result(
            tool_name,
            text,
            context,
            data={"context": project_context.model_dump(), "tickets": tickets},
        )
