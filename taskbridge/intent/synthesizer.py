"""
Command Synthesizer - Turns a classified request into a Taskwarrior command.

Rules per intent:
=================
```
add        → add <residual>
list       → list due:today <scope>      ("today" / "now" in the request)
             list priority:H <scope>     ("urgent" / "high")
             list project:<name>         ("project <name>" / "project:<name>")
             list <scope>                (anything else)
complete   → done <first number>         (no number → 1)
next       → next <scope>
context    → context <residual>          (empty → context list)
otherwise  → <intent> <residual>
```

<scope> comes from the context detector: "+TICKET" when a ticket is
known, "project:NAME" when only a project is, nothing for an empty
context.

Arguments are built as a token list. They are never joined into a shell
string; the executor hands them to the process as argv.
"""

import logging
import re
import shlex
from typing import List, Optional

from taskbridge.context.detector import ContextDetector, context_detector
from taskbridge.context.schemas import ProjectContext
from taskbridge.intent.schemas import IntentType, ParsedRequest, SynthesizedCommand

logger = logging.getLogger("taskbridge.intent.synthesizer")

TODAY_CUE = re.compile(r"\b(today|now)\b", re.IGNORECASE)
PRIORITY_CUE = re.compile(r"\b(urgent|high)\b", re.IGNORECASE)
PROJECT_CUE = re.compile(r"\bproject\b", re.IGNORECASE)
PROJECT_NAME = re.compile(r"project[: ](\S+)", re.IGNORECASE)
TASK_ID = re.compile(r"\d+")

# Completing with no id given targets task 1. Kept on purpose; see DESIGN.md.
DEFAULT_COMPLETE_ID = "1"


def tokenize(text: str) -> List[str]:
    """
    Split residual text into arguments, keeping quoted phrases together.

    Falls back to whitespace splitting when quotes are unbalanced
    ("don't forget" is a valid request).
    """
    try:
        return shlex.split(text)
    except ValueError:
        return text.split()


class CommandSynthesizer:
    """
    Builds SynthesizedCommand objects from (intent, residual text, context).

    Usage:
        synthesizer = CommandSynthesizer()
        command = synthesizer.synthesize(IntentType.LIST, "urgent", context)
        command.command_line   # "list priority:H project:web"
    """

    def __init__(self, detector: Optional[ContextDetector] = None):
        self.detector = detector or context_detector

    def synthesize(
        self,
        intent: IntentType,
        residual_text: str,
        context: ProjectContext,
    ) -> SynthesizedCommand:
        """
        Build the Taskwarrior command for one request.

        Args:
            intent: Classified intent
            residual_text: Query text left after the trigger was removed
            context: Context snapshot used for scoping

        Returns:
            SynthesizedCommand ready for the executor
        """
        scope = self.detector.scope_filter(context)

        if intent == IntentType.ADD:
            command = SynthesizedCommand(verb="add", args=tuple(tokenize(residual_text)))

        elif intent == IntentType.LIST:
            command = SynthesizedCommand(verb="list", args=tuple(self._list_filter(residual_text, scope)))

        elif intent == IntentType.COMPLETE:
            command = SynthesizedCommand(verb="done", args=(self._task_id(residual_text),))

        elif intent == IntentType.NEXT:
            command = SynthesizedCommand(verb="next", args=tuple(scope))

        elif intent == IntentType.CONTEXT:
            args = tokenize(residual_text) or ["list"]
            command = SynthesizedCommand(verb="context", args=tuple(args))

        else:
            command = SynthesizedCommand(verb=intent.value, args=tuple(tokenize(residual_text)))

        logger.debug(f"Synthesized {intent.value} → {command.command_line!r}")
        return command

    def synthesize_request(self, request: ParsedRequest, context: ProjectContext) -> SynthesizedCommand:
        return self.synthesize(request.intent, request.residual_text, context)

    # -----------------------------------------------------------------------
    # HELPERS
    # -----------------------------------------------------------------------

    @staticmethod
    def _list_filter(residual_text: str, scope: List[str]) -> List[str]:
        if TODAY_CUE.search(residual_text):
            return ["due:today", *scope]

        if PRIORITY_CUE.search(residual_text):
            return ["priority:H", *scope]

        if PROJECT_CUE.search(residual_text):
            match = PROJECT_NAME.search(residual_text)
            return [f"project:{match.group(1)}"] if match else []

        return list(scope)

    @staticmethod
    def _task_id(residual_text: str) -> str:
        match = TASK_ID.search(residual_text)
        if match:
            return match.group(0)

        logger.warning(
            f"No task id in {residual_text!r}; completing task {DEFAULT_COMPLETE_ID}"
        )
        return DEFAULT_COMPLETE_ID


command_synthesizer = CommandSynthesizer()
