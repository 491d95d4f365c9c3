"""
Intent Classifier - Maps a natural-language query to an intent.

Classification is a single linear scan over an ordered table of
(intent, trigger pattern) pairs:

1. Each pattern is anchored at the start of the query (case-insensitive)
2. The first pattern that matches wins; later entries are not consulted
3. The matched prefix is cut off and the rest becomes the residual text
4. No match → LIST, with the whole query as residual text

Triggers are prefixes, not whole words. "tasks for today" starts with
"task", so it is an ADD request even though "tasks" is also a LIST
trigger: ADD is declared first.

Example:
========
    classify("mark task 5 as done")
    → ParsedRequest(intent=COMPLETE, residual_text="task 5 as done")
"""

import logging
import re
from typing import Pattern, Sequence, Tuple

from taskbridge.intent.schemas import IntentType, ParsedRequest

logger = logging.getLogger("taskbridge.intent.classifier")


def _trigger(*words: str) -> Pattern[str]:
    return re.compile(r"^(" + "|".join(words) + r")", re.IGNORECASE)


# ---------------------------------------------------------------------------
# TRIGGER TABLE
# ---------------------------------------------------------------------------
# Declaration order decides overlaps. Do not reorder.
INTENT_TRIGGERS: Tuple[Tuple[IntentType, Pattern[str]], ...] = (
    (IntentType.ADD, _trigger("add", "create", "new", "make", "todo", "task")),
    (IntentType.LIST, _trigger("list", "show", "what", "tasks", "todos")),
    (IntentType.COMPLETE, _trigger("done", "complete", "finish", "mark", "check")),
    (IntentType.MODIFY, _trigger("modify", "change", "update", "edit")),
    (IntentType.DELETE, _trigger("delete", "remove", "rm")),
    (IntentType.PRIORITIZE, _trigger("prioritize", "priority", "urgent", "important")),
    (IntentType.CONTEXT, _trigger("where", "context", "project", "current")),
    (IntentType.NEXT, _trigger("next", "now", "focus", "immediate")),
)

DEFAULT_INTENT = IntentType.LIST


class IntentClassifier:
    """
    Classifies queries against an ordered trigger table.

    Usage:
        classifier = IntentClassifier()
        request = classifier.classify("show tasks for today")
        request.intent          # IntentType.LIST
        request.residual_text   # "tasks for today"
    """

    def __init__(
        self,
        triggers: Sequence[Tuple[IntentType, Pattern[str]]] = INTENT_TRIGGERS,
    ):
        self.triggers = tuple(triggers)

    def classify(self, query: str) -> ParsedRequest:
        """
        Classify a query. Never fails: unmatched input falls back to LIST.

        Args:
            query: Raw natural-language request

        Returns:
            ParsedRequest with the intent and residual text
        """
        for intent, pattern in self.triggers:
            match = pattern.match(query)
            if match:
                residual = query[match.end():].strip()
                logger.debug(f"Classified {query[:50]!r} as {intent.value} (trigger {match.group(0)!r})")
                return ParsedRequest(intent=intent, residual_text=residual)

        logger.debug(f"No trigger matched {query[:50]!r}, defaulting to {DEFAULT_INTENT.value}")
        return ParsedRequest(intent=DEFAULT_INTENT, residual_text=query)


intent_classifier = IntentClassifier()


def classify(query: str) -> ParsedRequest:
    """Classify with the default trigger table."""
    return intent_classifier.classify(query)
