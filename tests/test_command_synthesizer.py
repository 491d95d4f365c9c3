"""
Tests for Command Synthesizer - intent + context → Taskwarrior command.

This module tests:
- The per-intent rules
- List cues (today, urgent, project)
- Scope filters derived from the context
- Tokenization of residual text
"""

import logging

import pytest

from taskbridge.context.schemas import ProjectContext
from taskbridge.intent.classifier import classify
from taskbridge.intent.schemas import IntentType, SynthesizedCommand
from taskbridge.intent.synthesizer import CommandSynthesizer, tokenize


EMPTY = ProjectContext()
PROJECT_ONLY = ProjectContext(current_project="web", workspace_path="/src/web")
WITH_TICKET = ProjectContext(
    current_ticket="DRX-42",
    current_project="web",
    workspace_path="/src/web",
    tickets_path="/src/web/.tickets",
)


@pytest.fixture
def synthesizer(detector) -> CommandSynthesizer:
    return CommandSynthesizer(detector=detector)


class TestTokenize:
    """Tests for residual text splitting."""

    def test_plain_words(self):
        assert tokenize("fix the login bug") == ["fix", "the", "login", "bug"]

    def test_quoted_phrase_stays_together(self):
        assert tokenize('"fix login" due:today') == ["fix login", "due:today"]

    def test_unbalanced_quote_falls_back(self):
        assert tokenize("don't forget") == ["don't", "forget"]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize("   ") == []


class TestAdd:

    def test_add_uses_residual(self, synthesizer):
        command = synthesizer.synthesize(IntentType.ADD, "fix the login bug", WITH_TICKET)

        assert command == SynthesizedCommand(verb="add", args=("fix", "the", "login", "bug"))

    def test_add_does_not_scope(self, synthesizer):
        """Tagging new tasks is the job of enhance_task_description, not add."""
        command = synthesizer.synthesize(IntentType.ADD, "write docs", WITH_TICKET)

        assert "+DRX-42" not in command.args


class TestList:
    """Tests for list filters and cues."""

    def test_show_me_all_tasks_with_empty_context(self, synthesizer):
        command = synthesizer.synthesize_request(classify("show me all tasks"), EMPTY)

        assert command.verb == "list"
        assert command.args == ()
        assert command.command_line == "list "

    def test_plain_list_uses_project_scope(self, synthesizer):
        command = synthesizer.synthesize(IntentType.LIST, "everything", PROJECT_ONLY)

        assert command.to_argv() == ["list", "project:web"]

    def test_plain_list_uses_ticket_scope(self, synthesizer):
        command = synthesizer.synthesize(IntentType.LIST, "everything", WITH_TICKET)

        assert command.to_argv() == ["list", "+DRX-42"]

    @pytest.mark.parametrize("residual", ["tasks for today", "what is due now", "TODAY please"])
    def test_today_cue(self, synthesizer, residual):
        command = synthesizer.synthesize(IntentType.LIST, residual, PROJECT_ONLY)

        assert command.to_argv() == ["list", "due:today", "project:web"]

    @pytest.mark.parametrize("residual", ["urgent tasks", "high priority stuff"])
    def test_priority_cue(self, synthesizer, residual):
        command = synthesizer.synthesize(IntentType.LIST, residual, WITH_TICKET)

        assert command.to_argv() == ["list", "priority:H", "+DRX-42"]

    def test_today_beats_priority(self, synthesizer):
        command = synthesizer.synthesize(IntentType.LIST, "urgent tasks for today", EMPTY)

        assert command.to_argv() == ["list", "due:today"]

    def test_cues_are_whole_words(self, synthesizer):
        """"nowhere" and "highway" are not cues."""
        command = synthesizer.synthesize(IntentType.LIST, "nowhere near the highway", PROJECT_ONLY)

        assert command.to_argv() == ["list", "project:web"]

    @pytest.mark.parametrize("residual", ["tasks for project api", "tasks in project:api"])
    def test_project_cue_with_name(self, synthesizer, residual):
        command = synthesizer.synthesize(IntentType.LIST, residual, WITH_TICKET)

        assert command.to_argv() == ["list", "project:api"]

    def test_project_cue_without_name(self, synthesizer):
        command = synthesizer.synthesize(IntentType.LIST, "tasks by project", WITH_TICKET)

        assert command.to_argv() == ["list"]


class TestComplete:
    """Tests for the done rule."""

    def test_first_number_is_the_id(self, synthesizer):
        command = synthesizer.synthesize_request(classify("mark task 5 as done"), EMPTY)

        assert command.to_argv() == ["done", "5"]

    def test_first_of_several_numbers(self, synthesizer):
        command = synthesizer.synthesize(IntentType.COMPLETE, "12 and 13", EMPTY)

        assert command.to_argv() == ["done", "12"]

    def test_missing_id_defaults_to_one(self, synthesizer, caplog):
        with caplog.at_level(logging.WARNING, logger="taskbridge.intent.synthesizer"):
            command = synthesizer.synthesize(IntentType.COMPLETE, "the login bug", EMPTY)

        assert command.to_argv() == ["done", "1"]
        assert "completing task 1" in caplog.text


class TestNextAndContext:

    def test_next_with_ticket(self, synthesizer):
        command = synthesizer.synthesize(IntentType.NEXT, "", WITH_TICKET)

        assert command.to_argv() == ["next", "+DRX-42"]

    def test_next_with_project(self, synthesizer):
        command = synthesizer.synthesize(IntentType.NEXT, "whatever", PROJECT_ONLY)

        assert command.to_argv() == ["next", "project:web"]

    def test_next_empty_context(self, synthesizer):
        command = synthesizer.synthesize(IntentType.NEXT, "", EMPTY)

        assert command.to_argv() == ["next"]
        assert command.command_line == "next "

    def test_context_with_name(self, synthesizer):
        command = synthesizer.synthesize(IntentType.CONTEXT, "work", EMPTY)

        assert command.to_argv() == ["context", "work"]

    def test_context_without_name_lists(self, synthesizer):
        command = synthesizer.synthesize(IntentType.CONTEXT, "", WITH_TICKET)

        assert command.to_argv() == ["context", "list"]


class TestPassThrough:
    """Intents without a dedicated rule use the intent name as the verb."""

    @pytest.mark.parametrize("intent,residual,argv", [
        (IntentType.MODIFY, "4 priority:H", ["modify", "4", "priority:H"]),
        (IntentType.DELETE, "7", ["delete", "7"]),
        (IntentType.PRIORITIZE, "the backlog", ["prioritize", "the", "backlog"]),
    ])
    def test_verb_is_intent_value(self, synthesizer, intent, residual, argv):
        command = synthesizer.synthesize(intent, residual, WITH_TICKET)

        assert command.to_argv() == argv
