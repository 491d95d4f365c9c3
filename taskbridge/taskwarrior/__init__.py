"""
Taskwarrior Module - the bridge's only outbound dependency.

Usage:
======
    from taskbridge.taskwarrior import taskwarrior

    response = await taskwarrior.execute(["next", "limit:1"])
"""

from taskbridge.taskwarrior.executor import (
    BENIGN_STDERR,
    TaskwarriorExecutor,
    TaskwarriorResponse,
    taskwarrior,
)

__all__ = [
    "BENIGN_STDERR",
    "TaskwarriorExecutor",
    "TaskwarriorResponse",
    "taskwarrior",
]
