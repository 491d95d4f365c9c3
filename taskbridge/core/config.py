"""
Configuration module - centralized settings for the entire bridge.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Bridge settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override, set environment variables:
        export TASK_BINARY=/usr/local/bin/task
        export TICKET_PREFIX=PROJ-
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Server name announced to MCP clients and shown in API docs
    APP_NAME: str = "mcp-taskwarrior-ai"
    APP_VERSION: str = "0.1.0"

    # LOG_LEVEL: Level for the "taskbridge" logger tree (DEBUG, INFO, ...)
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # TASKWARRIOR SETTINGS
    # ---------------------------------------------------------------------------
    # TASK_BINARY: Executable invoked for every command
    TASK_BINARY: str = "task"

    # TASK_RC_OVERRIDES: rc.* arguments placed before every command.
    # Taskwarrior prints a "Configuration override" notice on stderr for each;
    # the executor ignores that notice.
    # - rc.confirmation=off keeps delete/modify from waiting on a y/n prompt
    TASK_RC_OVERRIDES: List[str] = ["rc.confirmation=off"]

    # TASK_COMMAND_TIMEOUT: Seconds before a hung Taskwarrior process is killed.
    # None waits forever.
    TASK_COMMAND_TIMEOUT: Optional[float] = 30.0

    # ---------------------------------------------------------------------------
    # CONTEXT DETECTION SETTINGS
    # ---------------------------------------------------------------------------
    GIT_BINARY: str = "git"
    GIT_COMMAND_TIMEOUT: Optional[float] = 5.0

    # PROJECT_MARKER_FILE: Single line naming the project, read from the cwd
    PROJECT_MARKER_FILE: str = ".taskproject"

    # TASK_STATE_FILE: JSON file at the workspace root, {"currentFocus": {"ticket": ...}}
    TASK_STATE_FILE: str = ".task-state.json"

    # TICKETS_DIR: Directory under the workspace root, one subdirectory per ticket
    TICKETS_DIR: str = ".tickets"

    # TICKET_PREFIX: Only ticket directories starting with this are listed
    TICKET_PREFIX: str = "DRX-"

    # TICKET_PATTERN: A git branch matching this (from the start) is a ticket
    TICKET_PATTERN: str = r"^[A-Z]+-\d+"

    CHECKLIST_FILE: str = "mr-checklist.md"
    NOTES_FILE: str = "context.md"

    # DEFAULT_PROJECT: Label used when neither a ticket nor a project is known
    DEFAULT_PROJECT: str = "general"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from taskbridge.core.config import settings
settings = Settings()
