"""
Taskwarrior Executor - Runs the `task` executable as a child process.

The executor is the only place the bridge talks to Taskwarrior. It:
1. Prepends the executable and rc.* overrides to the argument list
2. Spawns the process directly (no shell) and awaits it
3. Ignores the benign "Configuration override" notice on stderr and logs
   anything else found there
4. Raises TaskwarriorError on a non-zero exit, a spawn failure or a timeout

Example:
    response = await taskwarrior.execute(["list", "project:web"])
    print(response.stdout)
"""

import asyncio
import logging
import shlex
import time
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence

from taskbridge.core.config import Settings, settings
from taskbridge.core.errors import TaskwarriorError
from taskbridge.intent.schemas import SynthesizedCommand
from taskbridge.monitoring.logger import CommandLogger, command_logger

logger = logging.getLogger("taskbridge.taskwarrior")

BENIGN_STDERR = "Configuration override"


@dataclass
class TaskwarriorResponse:
    """
    Outcome of one successful Taskwarrior run.

    Attributes:
        args: Arguments after the executable (rc overrides excluded)
        stdout: Captured standard output
        stderr: Captured standard error
        return_code: Process exit status
        latency_ms: Wall time of the run
        request_id: Identifier used in the command log
    """
    args: List[str]
    stdout: str
    stderr: str = ""
    return_code: int = 0
    latency_ms: float = 0.0
    request_id: str = ""


class TaskwarriorExecutor:
    """
    Async wrapper around the Taskwarrior CLI.

    Usage:
        executor = TaskwarriorExecutor()
        output = await executor.run_text(["next", "limit:5"])
        response = await executor.run(SynthesizedCommand(verb="done", args=("3",)))
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        monitor: Optional[CommandLogger] = None,
    ):
        self.config = config or settings
        self.monitor = monitor or command_logger

    def build_argv(self, args: Sequence[str]) -> List[str]:
        return [self.config.TASK_BINARY, *self.config.TASK_RC_OVERRIDES, *args]

    async def execute(self, args: Sequence[str]) -> TaskwarriorResponse:
        """
        Run Taskwarrior with the given arguments.

        Args:
            args: Arguments after `task`, e.g. ["add", "Fix bug", "+DRX-1"]

        Returns:
            TaskwarriorResponse with captured output

        Raises:
            TaskwarriorError: non-zero exit, executable missing, or timeout
        """
        args = [arg for arg in args if arg]
        request_id = uuid.uuid4().hex[:12]
        argv = self.build_argv(args)
        start_time = time.time()

        self.monitor.log_request(request_id, args)

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.monitor.log_error(request_id, str(e))
            raise TaskwarriorError(f"could not run {self.config.TASK_BINARY}: {e}", args=args) from e

        try:
            raw_stdout, raw_stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.config.TASK_COMMAND_TIMEOUT
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            detail = f"command timed out after {self.config.TASK_COMMAND_TIMEOUT}s: task {' '.join(args)}"
            self.monitor.log_error(request_id, detail)
            raise TaskwarriorError(detail, args=args) from e

        stdout = raw_stdout.decode("utf-8", errors="replace")
        stderr = raw_stderr.decode("utf-8", errors="replace")
        latency_ms = (time.time() - start_time) * 1000

        if process.returncode != 0:
            detail = stderr.strip() or stdout.strip() or f"exit status {process.returncode}"
            detail = f"Command failed: task {' '.join(args)}\n{detail}"
            self.monitor.log_error(request_id, detail, return_code=process.returncode)
            raise TaskwarriorError(detail, args=args, return_code=process.returncode, stderr=stderr)

        if stderr.strip() and BENIGN_STDERR not in stderr:
            logger.warning(f"Taskwarrior stderr: {stderr.strip()}")

        self.monitor.log_response(request_id, process.returncode, stdout, latency_ms)

        return TaskwarriorResponse(
            args=args,
            stdout=stdout,
            stderr=stderr,
            return_code=process.returncode,
            latency_ms=latency_ms,
            request_id=request_id,
        )

    async def run_text(self, args: Sequence[str]) -> str:
        """Run Taskwarrior and return stdout only."""
        response = await self.execute(args)
        return response.stdout

    async def run(self, command: SynthesizedCommand) -> TaskwarriorResponse:
        return await self.execute(command.to_argv())

    async def run_raw(self, command: str) -> TaskwarriorResponse:
        """
        Run a command typed as a single string (without the `task` prefix).

        Raises:
            TaskwarriorError: also when the string has unbalanced quotes
        """
        try:
            args = shlex.split(command)
        except ValueError as e:
            raise TaskwarriorError(f"cannot parse command {command!r}: {e}") from e
        return await self.execute(args)


taskwarrior = TaskwarriorExecutor()
