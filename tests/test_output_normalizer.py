"""
Tests for Output Normalizer - report table reshaping.
"""

import pytest

from taskbridge.intent.normalizer import extract_task_rows, normalize
from taskbridge.intent.schemas import IntentType


class TestNormalizeListings:
    """list/next output is reduced to its task rows."""

    @pytest.mark.parametrize("intent", [IntentType.LIST, IntentType.NEXT, "list", "next"])
    def test_rows_extracted(self, list_output, intent):
        result = normalize(list_output, intent)

        assert result == (
            "Current tasks:\n"
            "1 2d   web     Fix the login bug    8.9\n"
            "2 5h   web     Write release notes  1.2"
        )

    def test_summary_line_is_not_a_row(self, list_output):
        rows = extract_task_rows(list_output)

        assert len(rows) == 2
        assert not any(row.endswith("tasks") for row in rows)

    def test_rows_without_trailing_summary(self):
        output = "ID Description\n 7 Ship it\n 8 Celebrate\n"

        assert extract_task_rows(output) == ["7 Ship it", "8 Celebrate"]

    def test_row_starting_with_tasks_is_kept(self):
        """Only a line that is nothing but "N task(s)" ends the table."""
        output = "ID Description\n-- ---\n 3 tasks cleanup\n 4 write docs\n\n2 tasks\n"

        assert extract_task_rows(output) == ["3 tasks cleanup", "4 write docs"]

    def test_no_rows_returns_raw(self):
        raw = "No matches.\n"

        assert normalize(raw, IntentType.LIST) == raw

    def test_empty_output(self):
        assert normalize("", IntentType.NEXT) == ""

    def test_rows_before_header_ignored(self):
        output = "3 unrelated line\nID Description\n 1 Real task\n\n1 task\n"

        assert extract_task_rows(output) == ["1 Real task"]

    def test_tasks_line_outside_listing_stops_scan(self):
        output = "Found 2 tasks elsewhere\nID Description\n 1 Never reached\n"

        assert extract_task_rows(output) == []


class TestPassThrough:
    """Every other intent gets the raw output back."""

    @pytest.mark.parametrize("intent", [
        IntentType.ADD,
        IntentType.COMPLETE,
        IntentType.MODIFY,
        IntentType.DELETE,
        IntentType.PRIORITIZE,
        IntentType.CONTEXT,
        IntentType.RAW,
    ])
    def test_non_listing_intents(self, list_output, intent):
        assert normalize(list_output, intent) == list_output

    def test_unknown_intent_string(self, list_output):
        assert normalize(list_output, "summarize") == list_output

    def test_created_task_message(self):
        raw = "Created task 3.\n"

        assert normalize(raw, IntentType.ADD) == raw
