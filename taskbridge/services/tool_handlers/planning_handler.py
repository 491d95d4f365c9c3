"""
Planning Handler - Handles task_eisenhower.

Sorts pending tasks into the four Eisenhower quadrants using one filtered
`list` per quadrant:

```
                 urgent (due ≤ today)      not urgent (due > today)
important (H)    Do First                  Schedule
less important   Delegate (M, L)           Eliminate (L)
```
"""

import logging
from typing import List, Tuple

from taskbridge.services.tool_handlers.base import HandlerContext, ToolHandler
from taskbridge.services.tool_result import ToolResult
from taskbridge.tools.schemas import ToolArguments

logger = logging.getLogger("taskbridge.services.tool_handlers.planning")

# (heading, list filter)
EISENHOWER_QUADRANTS: Tuple[Tuple[str, List[str]], ...] = (
    ("🔴 URGENT & IMPORTANT (Do First)", ["priority:H", "due.before:tomorrow", "list"]),
    ("🟡 NOT URGENT & IMPORTANT (Schedule)", ["priority:H", "due.after:today", "list"]),
    ("🟠 URGENT & NOT IMPORTANT (Delegate)", ["priority:M,L", "due.before:tomorrow", "list"]),
    ("⚪ NOT URGENT & NOT IMPORTANT (Eliminate)", ["priority:L", "due.after:today", "list"]),
)


class PlanningHandler(ToolHandler):
    """Handler for planning views built from several reports."""

    @property
    def handler_name(self) -> str:
        return "planning"

    @property
    def supported_tools(self) -> List[str]:
        return ["task_eisenhower"]

    async def handle(
        self,
        tool_name: str,
        arguments: ToolArguments,
        context: HandlerContext,
    ) -> ToolResult:
        self._log_entry(tool_name, context)

        sections = []
        for heading, args in EISENHOWER_QUADRANTS:
            output = await context.executor.run_text(args)
            sections.append(f"{heading}:\n{output}")

        text = "Eisenhower Matrix:\n\n" + "\n\n".join(sections)
        result = self._result(tool_name, text, context)
        self._log_exit(tool_name, context, result)
        return result
