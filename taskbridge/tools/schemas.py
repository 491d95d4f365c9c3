"""
Tool Argument Schemas - Pydantic models for every tool's arguments.

The JSON schema advertised to MCP clients is generated from these models,
and incoming arguments are validated against them before any handler runs.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolArguments(BaseModel):
    """Base for tool arguments. Unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class NoArguments(ToolArguments):
    pass


class NaturalQueryArguments(ToolArguments):
    query: str = Field(min_length=1, description="Natural language task query or command")


class RawCommandArguments(ToolArguments):
    command: str = Field(min_length=1, description='Raw Taskwarrior command (without "task" prefix)')


class ContextSetArguments(ToolArguments):
    context: str = Field(
        min_length=1,
        pattern=r"^\S+$",
        description='Project or context name (e.g., "myheb-android", "pharmacy", "DRX-12345")',
    )


class SmartAddArguments(ToolArguments):
    description: str = Field(min_length=1, description="Task description")
    project: Optional[str] = Field(default=None, description="Project name (optional)")
    priority: Optional[Literal["H", "M", "L"]] = Field(
        default=None,
        description="Priority: H(igh), M(edium), L(ow)",
    )
    due: Optional[str] = Field(
        default=None,
        description='Due date (e.g., "today", "tomorrow", "2024-01-15")',
    )
    tags: List[str] = Field(default_factory=list, description="Tags for the task")

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("tags")
    @classmethod
    def _strip_tag_markers(cls, value: List[str]) -> List[str]:
        return [tag.lstrip("+").strip() for tag in value if tag.lstrip("+").strip()]


class TicketArguments(ToolArguments):
    ticket: str = Field(min_length=1, description='Ticket ID (e.g., "DRX-12345")')

    @field_validator("ticket")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if value in {".", ".."} or any(sep in value for sep in ("/", "\\")):
            raise ValueError("ticket must be a plain identifier, not a path")
        return value
