"""
Base Tool Handler - Abstract interface for all tool handlers.

This module defines the contract that all tool handlers must follow.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each handler implements it.
This allows ToolService to route to handlers without code changes.

Example:
    handler = TicketHandler()
    if handler.can_handle("task_where_am_i"):
        result = await handler.handle("task_where_am_i", arguments, context)
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from taskbridge.context.detector import ContextDetector, context_detector
from taskbridge.intent.classifier import IntentClassifier, intent_classifier
from taskbridge.intent.synthesizer import CommandSynthesizer, command_synthesizer
from taskbridge.services.tool_result import ToolResult
from taskbridge.taskwarrior.executor import TaskwarriorExecutor, taskwarrior
from taskbridge.tools.schemas import ToolArguments

logger = logging.getLogger("taskbridge.services.tool_handlers")


@dataclass
class HandlerContext:
    """
    Everything a handler needs to process one tool call.

    Services default to the module singletons; tests pass fakes instead.

    Usage:
        context = HandlerContext(request_id="abc123", start_time=time.time())
        result = await handler.handle("task_raw", arguments, context)
    """

    request_id: str
    start_time: float

    detector: ContextDetector = field(default_factory=lambda: context_detector)
    executor: TaskwarriorExecutor = field(default_factory=lambda: taskwarrior)
    classifier: IntentClassifier = field(default_factory=lambda: intent_classifier)
    synthesizer: CommandSynthesizer = field(default_factory=lambda: command_synthesizer)

    def elapsed_ms(self) -> float:
        return (time.time() - self.start_time) * 1000


class ToolHandler(ABC):
    """
    Abstract base class for tool handlers.

    Responsibilities:
    - Declare which tools it serves (supported_tools)
    - Run the tool and return a ToolResult (handle)

    NOT Responsible For:
    - Validating arguments (the registry's job)
    - Converting failures into error results (ToolService's job)
    - Transport concerns (server/router's job)
    """

    @property
    @abstractmethod
    def handler_name(self) -> str:
        """Unique identifier for logging (e.g. "ticket")."""

    @property
    @abstractmethod
    def supported_tools(self) -> List[str]:
        """Tool names this handler serves."""

    def can_handle(self, tool_name: str) -> bool:
        return tool_name in self.supported_tools

    @abstractmethod
    async def handle(
        self,
        tool_name: str,
        arguments: ToolArguments,
        context: HandlerContext,
    ) -> ToolResult:
        """
        Run the tool.

        Args:
            tool_name: One of supported_tools
            arguments: Validated arguments for that tool
            context: Services and request metadata

        Returns:
            ToolResult with the text payload

        Raises:
            TaskwarriorError: when a Taskwarrior command fails
        """

    def _result(
        self,
        tool_name: str,
        text: str,
        context: HandlerContext,
        data: Optional[Dict[str, Any]] = None,
    ) -> ToolResult:
        return ToolResult(
            success=True,
            tool_name=tool_name,
            text=text,
            data=data,
            processing_time_ms=context.elapsed_ms(),
            request_id=context.request_id,
        )

    def _log_entry(self, tool_name: str, context: HandlerContext) -> None:
        logger.info(
            f"[{context.request_id}] {self.handler_name}.handle({tool_name}) called",
            extra={"handler": self.handler_name, "tool": tool_name},
        )

    def _log_exit(self, tool_name: str, context: HandlerContext, result: ToolResult) -> None:
        logger.info(
            f"[{context.request_id}] {self.handler_name}.handle({tool_name}) completed",
            extra={
                "handler": self.handler_name,
                "success": result.success,
                "processing_time_ms": result.processing_time_ms,
            },
        )
