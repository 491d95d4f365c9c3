"""
Context Schemas - the project/ticket snapshot produced by the detector.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ProjectContext(BaseModel):
    """
    Immutable snapshot of where the user is working.

    Every field is either None or a non-empty string. The detector builds a
    fresh snapshot on each detection; handlers pass it explicitly to the
    synthesizer and the ticket helpers.

    Attributes:
        current_ticket: Ticket identifier (e.g. "DRX-12345")
        current_project: Project name (marker file, git repo or directory name)
        workspace_path: Directory the project is anchored at
        tickets_path: Directory holding one subdirectory per ticket
    """
    model_config = ConfigDict(frozen=True)

    current_ticket: Optional[str] = None
    current_project: Optional[str] = None
    workspace_path: Optional[str] = None
    tickets_path: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def with_ticket(self, ticket: Optional[str]) -> "ProjectContext":
        """Return a copy with the ticket replaced."""
        return ProjectContext(**{**self.model_dump(), "current_ticket": ticket})

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())
