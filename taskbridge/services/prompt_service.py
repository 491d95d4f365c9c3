"""
Prompt Service - Builds the review prompts offered to MCP clients.

Prompts:
========
- daily_review: today's tasks, urgent tasks and the recommended next task
- weekly_planning: tasks due this week and active projects

Each prompt renders to one user message filled with live Taskwarrior
output. Taskwarrior failures propagate as TaskwarriorError.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from taskbridge.core.errors import UnknownPromptError
from taskbridge.prompts.review_prompts import (
    DAILY_REVIEW_DESCRIPTION,
    DAILY_REVIEW_PROMPT,
    WEEKLY_PLANNING_DESCRIPTION,
    WEEKLY_PLANNING_PROMPT,
)
from taskbridge.taskwarrior.executor import TaskwarriorExecutor, taskwarrior

logger = logging.getLogger("taskbridge.services.prompts")


@dataclass
class PromptDefinition:
    name: str
    description: str


class PromptService:
    """
    Usage:
        text = await prompt_service.render("daily_review")
    """

    def __init__(self, executor: Optional[TaskwarriorExecutor] = None):
        self.executor = executor or taskwarrior
        self._prompts: Dict[str, PromptDefinition] = {
            "daily_review": PromptDefinition("daily_review", DAILY_REVIEW_DESCRIPTION),
            "weekly_planning": PromptDefinition("weekly_planning", WEEKLY_PLANNING_DESCRIPTION),
        }

    def list_prompts(self) -> List[PromptDefinition]:
        return list(self._prompts.values())

    def get_prompt(self, name: str) -> PromptDefinition:
        prompt = self._prompts.get(name)
        if prompt is None:
            raise UnknownPromptError(name)
        return prompt

    async def render(self, name: str) -> str:
        """
        Render a prompt to its message text.

        Raises:
            UnknownPromptError: for an unregistered name
            TaskwarriorError: when a report cannot be produced
        """
        self.get_prompt(name)
        logger.info(f"Rendering prompt {name}")

        if name == "daily_review":
            return DAILY_REVIEW_PROMPT.format(
                today_tasks=await self.executor.run_text(["due:today", "list"]),
                urgent_tasks=await self.executor.run_text(["priority:H", "list"]),
                next_task=await self.executor.run_text(["next", "limit:1"]),
            )

        return WEEKLY_PLANNING_PROMPT.format(
            week_tasks=await self.executor.run_text(["due.before:eow", "list"]),
            projects=await self.executor.run_text(["projects"]),
        )


prompt_service = PromptService()
