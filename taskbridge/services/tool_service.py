"""
Tool Processing Service - Business logic behind every tool call.

Responsibilities:
=================
- Validate arguments against the tool registry
- Route the call to the handler serving the tool
- Turn failures into error ToolResults with a category

NOT Responsible For:
====================
- MCP/HTTP request and response handling (server's and router's job)
- Building Taskwarrior commands (handlers and the synthesizer)

Architecture:
=============
```
┌───────────────┐  ┌───────────────┐
│  MCP server   │  │  HTTP router  │  ← transport only
└───────┬───────┘  └───────┬───────┘
        └────────┬─────────┘
                 ▼
        ┌─────────────────┐
        │   ToolService   │  ← validation + routing (this file)
        └────────┬────────┘
                 ▼
        ┌─────────────────┐
        │  Tool handlers  │  ← natural / command / planning / ticket
        └────────┬────────┘
                 ▼
        ┌─────────────────┐
        │   Taskwarrior   │
        └─────────────────┘
```

Usage:
======
```python
from taskbridge.services.tool_service import tool_service

result = await tool_service.call("task_natural", {"query": "show urgent tasks"})
print(result.text)
```
"""

import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from taskbridge.context.detector import ContextDetector, context_detector
from taskbridge.core.errors import InvalidToolArguments, TaskwarriorError, UnknownToolError
from taskbridge.intent.classifier import IntentClassifier, intent_classifier
from taskbridge.intent.synthesizer import CommandSynthesizer, command_synthesizer
from taskbridge.services.tool_handlers import (
    CommandHandler,
    HandlerContext,
    NaturalLanguageHandler,
    PlanningHandler,
    TicketHandler,
    ToolHandler,
)
from taskbridge.services.tool_result import ToolErrorKind, ToolResult
from taskbridge.taskwarrior.executor import TaskwarriorExecutor, taskwarrior
from taskbridge.tools.registry import ToolRegistry, tool_registry

logger = logging.getLogger("taskbridge.services.tools")


class ToolService:
    """
    Service for processing tool calls.

    All collaborators default to the module singletons and can be replaced
    for tests.
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        handlers: Optional[List[ToolHandler]] = None,
        detector: Optional[ContextDetector] = None,
        executor: Optional[TaskwarriorExecutor] = None,
        classifier: Optional[IntentClassifier] = None,
        synthesizer: Optional[CommandSynthesizer] = None,
    ):
        self.registry = registry or tool_registry
        self.handlers = handlers if handlers is not None else [
            NaturalLanguageHandler(),
            CommandHandler(),
            PlanningHandler(),
            TicketHandler(),
        ]
        self.detector = detector or context_detector
        self.executor = executor or taskwarrior
        self.classifier = classifier or intent_classifier
        if synthesizer is None:
            # Scope filters must come from the same detector
            synthesizer = CommandSynthesizer(detector) if detector else command_synthesizer
        self.synthesizer = synthesizer

    # -----------------------------------------------------------------------
    # MAIN ENTRY POINT
    # -----------------------------------------------------------------------

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """
        Process one tool call.

        Never raises: every failure comes back as a ToolResult with
        success=False, an error_kind and a readable message in text.

        Args:
            name: Tool name
            arguments: Raw arguments as received from the caller

        Returns:
            ToolResult
        """
        start_time = time.time()
        request_id = uuid.uuid4().hex[:12]
        logger.info(f"[{request_id}] Tool call: {name}")

        try:
            tool = self.registry.get_tool(name)
            validated = tool.validate(arguments)
            handler = self._find_handler(name)

            context = HandlerContext(
                request_id=request_id,
                start_time=start_time,
                detector=self.detector,
                executor=self.executor,
                classifier=self.classifier,
                synthesizer=self.synthesizer,
            )
            return await handler.handle(name, validated, context)

        except UnknownToolError as e:
            return self._error(name, str(e), ToolErrorKind.UNKNOWN_TOOL, request_id, start_time)

        except InvalidToolArguments as e:
            logger.warning(f"[{request_id}] {e}")
            return self._error(name, str(e), ToolErrorKind.INVALID_ARGUMENTS, request_id, start_time)

        except TaskwarriorError as e:
            logger.warning(f"[{request_id}] {name} failed: {e}")
            return self._error(name, str(e), ToolErrorKind.EXECUTION, request_id, start_time)

        except Exception as e:
            logger.error(f"[{request_id}] Tool processing failed: {e}", exc_info=True)
            return self._error(
                name,
                f"Failed to process {name}: {e}",
                ToolErrorKind.INTERNAL,
                request_id,
                start_time,
            )

    def _find_handler(self, name: str) -> ToolHandler:
        for handler in self.handlers:
            if handler.can_handle(name):
                return handler
        raise UnknownToolError(name)

    @staticmethod
    def _error(
        name: str,
        message: str,
        kind: ToolErrorKind,
        request_id: str,
        start_time: float,
    ) -> ToolResult:
        return ToolResult(
            success=False,
            tool_name=name,
            text=message,
            error_kind=kind,
            processing_time_ms=(time.time() - start_time) * 1000,
            request_id=request_id,
        )


tool_service = ToolService()
