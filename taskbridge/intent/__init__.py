"""
Intent Module - Natural language to Taskwarrior commands.

Example Flow:
============
User says: "show urgent tasks"

IntentClassifier extracts:
{
    "intent": "list",
    "residual_text": "urgent tasks"
}

CommandSynthesizer (context: project "web") builds:
    task list priority:H project:web

normalize() trims the report down to its task rows.
"""

from taskbridge.intent.schemas import IntentType, ParsedRequest, SynthesizedCommand
from taskbridge.intent.classifier import (
    INTENT_TRIGGERS,
    IntentClassifier,
    classify,
    intent_classifier,
)
from taskbridge.intent.synthesizer import CommandSynthesizer, command_synthesizer, tokenize
from taskbridge.intent.normalizer import extract_task_rows, normalize

__all__ = [
    "IntentType",
    "ParsedRequest",
    "SynthesizedCommand",
    "INTENT_TRIGGERS",
    "IntentClassifier",
    "classify",
    "intent_classifier",
    "CommandSynthesizer",
    "command_synthesizer",
    "tokenize",
    "extract_task_rows",
    "normalize",
]
