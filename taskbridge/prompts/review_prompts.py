"""
Review Prompts - Templates for the daily review and weekly planning prompts.

Each template is filled with raw Taskwarrior report output and sent to the
calling agent as a single user message.
"""

# ---------------------------------------------------------------------------
# DAILY REVIEW
# ---------------------------------------------------------------------------
# Reports: due:today list, priority:H list, next limit:1

DAILY_REVIEW_DESCRIPTION = "Get a daily review of tasks and priorities"

DAILY_REVIEW_PROMPT = """Daily Task Review:

Today's Tasks:
{today_tasks}

Urgent Tasks:
{urgent_tasks}

Recommended Next Task:
{next_task}

Please provide a prioritized plan for the day."""


# ---------------------------------------------------------------------------
# WEEKLY PLANNING
# ---------------------------------------------------------------------------
# Reports: due.before:eow list, projects

WEEKLY_PLANNING_DESCRIPTION = "Plan tasks for the upcoming week"

WEEKLY_PLANNING_PROMPT = """Weekly Planning:

This Week's Tasks:
{week_tasks}

Active Projects:
{projects}

Please help organize these tasks for the week ahead."""
