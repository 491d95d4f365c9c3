"""
Intent Schemas - Pydantic models for classified requests and commands.

These schemas define what flows between the classifier, the synthesizer
and the executor. Using Pydantic ensures type safety and validation.

Design Philosophy:
=================
- Immutable (frozen) models: nothing outlives a single request
- Arguments are kept as a tuple of tokens and only joined into a string
  for display and logging
"""

from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class IntentType(str, Enum):
    """
    Closed set of intents a natural-language query can map to.

    ADD: create a task
    LIST: show tasks (also the fallback when nothing matches)
    COMPLETE: mark a task done
    MODIFY: change a task
    DELETE: delete a task
    PRIORITIZE: priority-related request (passed through)
    CONTEXT: Taskwarrior context management
    NEXT: what to work on next
    RAW: a raw Taskwarrior command, never produced by the classifier
    """
    ADD = "add"
    LIST = "list"
    COMPLETE = "complete"
    MODIFY = "modify"
    DELETE = "delete"
    PRIORITIZE = "prioritize"
    CONTEXT = "context"
    NEXT = "next"
    RAW = "raw"


class ParsedRequest(BaseModel):
    """
    Result of classifying one query.

    Example:
        "add fix the login bug" → intent=ADD, residual_text="fix the login bug"
    """
    model_config = ConfigDict(frozen=True)

    intent: IntentType
    residual_text: str = Field(default="", description="Query with the matched trigger removed")


class SynthesizedCommand(BaseModel):
    """
    A concrete Taskwarrior invocation: `task <verb> <args...>`.

    Example:
        SynthesizedCommand(verb="list", args=("due:today", "project:web"))
        → command_line == "list due:today project:web"
    """
    model_config = ConfigDict(frozen=True)

    verb: str = Field(min_length=1)
    args: Tuple[str, ...] = Field(default=())

    @property
    def argument_string(self) -> str:
        return " ".join(self.args)

    @property
    def command_line(self) -> str:
        """Display form, as it would be typed after `task`."""
        return f"{self.verb} {self.argument_string}"

    def to_argv(self) -> List[str]:
        """Arguments handed to the executor (executable name excluded)."""
        return [self.verb, *self.args]
