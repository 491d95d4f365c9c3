"""
Natural Language Handler - Handles task_natural.

Pipeline:
=========
```
query ─► IntentClassifier ─► (intent, residual)
                                   │
        ContextDetector ─► context ┤
                                   ▼
                          CommandSynthesizer ─► task <verb> <args>
                                                      │
                                     normalize() ◄────┘
```
"""

import logging
from typing import List

from taskbridge.intent.normalizer import normalize
from taskbridge.services.tool_handlers.base import HandlerContext, ToolHandler
from taskbridge.services.tool_result import ToolResult
from taskbridge.tools.schemas import NaturalQueryArguments

logger = logging.getLogger("taskbridge.services.tool_handlers.natural")


class NaturalLanguageHandler(ToolHandler):
    """Turns a natural-language query into one Taskwarrior command."""

    @property
    def handler_name(self) -> str:
        return "natural"

    @property
    def supported_tools(self) -> List[str]:
        return ["task_natural"]

    async def handle(
        self,
        tool_name: str,
        arguments: NaturalQueryArguments,
        context: HandlerContext,
    ) -> ToolResult:
        self._log_entry(tool_name, context)

        request = context.classifier.classify(arguments.query)
        project_context = await context.detector.detect_context()
        command = context.synthesizer.synthesize_request(request, project_context)

        logger.info(
            f"[{context.request_id}] {arguments.query[:50]!r} → {request.intent.value}: "
            f"task {command.command_line}"
        )

        response = await context.executor.run(command)
        text = normalize(response.stdout, request.intent)

        result = self._result(
            tool_name,
            text,
            context,
            data={
                "intent": request.intent.value,
                "command": command.command_line,
            },
        )
        self._log_exit(tool_name, context, result)
        return result
