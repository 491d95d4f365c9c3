"""
Error types shared by the executor, the tool registry and the boundaries.

Hierarchy:
==========
```
TaskbridgeError
├── TaskwarriorError       Taskwarrior failed (non-zero exit, spawn error, timeout)
├── InvalidToolArguments   Tool arguments failed validation (nothing executed)
├── UnknownToolError       No tool registered under that name
└── UnknownPromptError     No prompt registered under that name
```

Missing environment (no git, no marker file, no state file) is not an
error: the context detector reports it as an absent value.
"""

from typing import Optional, Sequence


class TaskbridgeError(Exception):
    """Base class for all bridge errors."""


class TaskwarriorError(TaskbridgeError):
    """
    Raised when a Taskwarrior invocation fails.

    The message always starts with "Taskwarrior error: " so callers can
    surface it verbatim.
    """

    def __init__(
        self,
        detail: str,
        args: Sequence[str] = (),
        return_code: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(f"Taskwarrior error: {detail}")
        self.detail = detail
        self.command_args = tuple(args)
        self.return_code = return_code
        self.stderr = stderr


class InvalidToolArguments(TaskbridgeError):
    """Raised when tool arguments do not match the tool's argument model."""

    def __init__(self, tool_name: str, detail: str):
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")
        self.tool_name = tool_name
        self.detail = detail


class UnknownToolError(TaskbridgeError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnknownPromptError(TaskbridgeError):
    def __init__(self, name: str):
        super().__init__(f"Unknown prompt: {name}")
        self.name = name
