"""
Tests for Taskwarrior Executor - process spawning and error mapping.

The `task` binary is never run: asyncio.create_subprocess_exec is patched
with a fake process.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from taskbridge.core.errors import TaskwarriorError
from taskbridge.intent.schemas import SynthesizedCommand
from taskbridge.monitoring.logger import CommandLogger
from taskbridge.taskwarrior.executor import TaskwarriorExecutor, TaskwarriorResponse


def fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.wait = AsyncMock(return_value=returncode)
    process.returncode = returncode
    return process


@pytest.fixture
def executor(test_settings) -> TaskwarriorExecutor:
    return TaskwarriorExecutor(config=test_settings, monitor=MagicMock(spec=CommandLogger))


def patch_spawn(process=None, side_effect=None):
    return patch(
        "taskbridge.taskwarrior.executor.asyncio.create_subprocess_exec",
        new=AsyncMock(return_value=process, side_effect=side_effect),
    )


class TestBuildArgv:

    def test_executable_and_overrides_first(self, test_settings):
        config = test_settings.model_copy(update={
            "TASK_BINARY": "/usr/bin/task",
            "TASK_RC_OVERRIDES": ["rc.confirmation=off", "rc.verbose=nothing"],
        })
        executor = TaskwarriorExecutor(config=config)

        assert executor.build_argv(["list", "+DRX-1"]) == [
            "/usr/bin/task", "rc.confirmation=off", "rc.verbose=nothing", "list", "+DRX-1",
        ]

    def test_default_overrides_disable_confirmation(self):
        from taskbridge.core.config import Settings

        assert "rc.confirmation=off" in Settings(_env_file=None).TASK_RC_OVERRIDES


class TestExecute:
    """Tests for a single Taskwarrior run."""

    @pytest.mark.asyncio
    async def test_success(self, executor):
        process = fake_process(stdout=b"Created task 3.\n")

        with patch_spawn(process) as spawn:
            response = await executor.execute(["add", "Fix bug", "+DRX-1"])

        spawn.assert_awaited_once()
        assert spawn.await_args.args == ("task", "add", "Fix bug", "+DRX-1")
        assert spawn.await_args.kwargs["stdin"] == asyncio.subprocess.DEVNULL
        assert response.stdout == "Created task 3.\n"
        assert response.return_code == 0
        assert response.args == ["add", "Fix bug", "+DRX-1"]
        assert response.request_id
        executor.monitor.log_response.assert_called_once()

    @pytest.mark.asyncio
    async def test_response_is_plain_run_record(self, executor):
        with patch_spawn(fake_process(stdout=b"3\n")):
            response = await executor.execute(["count"])

        assert response == TaskwarriorResponse(
            args=["count"],
            stdout="3\n",
            latency_ms=response.latency_ms,
            request_id=response.request_id,
        )

    @pytest.mark.asyncio
    async def test_request_logged_before_spawn(self, executor):
        with patch_spawn(fake_process()):
            response = await executor.execute(["list", "+DRX-1"])

        executor.monitor.log_request.assert_called_once_with(response.request_id, ["list", "+DRX-1"])

    @pytest.mark.asyncio
    async def test_empty_arguments_dropped(self, executor):
        with patch_spawn(fake_process()) as spawn:
            response = await executor.execute(["list", "", "project:web"])

        assert spawn.await_args.args == ("task", "list", "project:web")
        assert response.args == ["list", "project:web"]

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, executor):
        process = fake_process(stderr=b"No matches.\n", returncode=1)

        with patch_spawn(process):
            with pytest.raises(TaskwarriorError) as exc_info:
                await executor.execute(["list", "+DRX-9"])

        error = exc_info.value
        assert error.return_code == 1
        assert error.command_args == ("list", "+DRX-9")
        assert "Command failed: task list +DRX-9" in str(error)
        assert "No matches." in str(error)
        executor.monitor.log_error.assert_called_once()

    @pytest.mark.asyncio
    async def test_non_zero_exit_uses_stdout_when_stderr_empty(self, executor):
        process = fake_process(stdout=b"Unknown command.\n", returncode=2)

        with patch_spawn(process):
            with pytest.raises(TaskwarriorError, match="Unknown command."):
                await executor.execute(["bogus"])

    @pytest.mark.asyncio
    async def test_missing_executable(self, executor):
        with patch_spawn(side_effect=FileNotFoundError("task")):
            with pytest.raises(TaskwarriorError, match="could not run task"):
                await executor.execute(["list"])

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, test_settings):
        config = test_settings.model_copy(update={"TASK_COMMAND_TIMEOUT": 0.01})
        executor = TaskwarriorExecutor(config=config, monitor=MagicMock(spec=CommandLogger))

        async def hang():
            await asyncio.sleep(5)

        process = fake_process()
        process.communicate = AsyncMock(side_effect=hang)

        with patch_spawn(process):
            with pytest.raises(TaskwarriorError, match="timed out"):
                await executor.execute(["sync"])

        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_benign_stderr_not_logged(self, executor, caplog):
        process = fake_process(
            stdout=b"ok\n",
            stderr=b"Configuration override rc.confirmation:off\n",
        )

        with patch_spawn(process):
            response = await executor.execute(["list"])

        assert response.stdout == "ok\n"
        assert "Taskwarrior stderr" not in caplog.text

    @pytest.mark.asyncio
    async def test_other_stderr_logged_as_warning(self, executor, caplog):
        process = fake_process(stdout=b"ok\n", stderr=b"Deprecated option\n")

        with patch_spawn(process):
            with caplog.at_level("WARNING", logger="taskbridge.taskwarrior"):
                await executor.execute(["list"])

        assert "Deprecated option" in caplog.text


class TestConvenienceWrappers:

    @pytest.mark.asyncio
    async def test_run_text(self, executor):
        with patch_spawn(fake_process(stdout=b"3 tasks\n")):
            assert await executor.run_text(["count"]) == "3 tasks\n"

    @pytest.mark.asyncio
    async def test_run_synthesized_command(self, executor):
        command = SynthesizedCommand(verb="done", args=("5",))

        with patch_spawn(fake_process()) as spawn:
            await executor.run(command)

        assert spawn.await_args.args == ("task", "done", "5")

    @pytest.mark.asyncio
    async def test_run_raw_keeps_quoted_phrases(self, executor):
        with patch_spawn(fake_process()) as spawn:
            await executor.run_raw('add "Write release notes" project:web')

        assert spawn.await_args.args == ("task", "add", "Write release notes", "project:web")

    @pytest.mark.asyncio
    async def test_run_raw_unbalanced_quotes(self, executor):
        with patch_spawn(fake_process()) as spawn:
            with pytest.raises(TaskwarriorError, match="cannot parse command"):
                await executor.run_raw('add "unterminated')

        spawn.assert_not_awaited()


class TestCommandLogger:
    """JSON lines written for each run."""

    def test_request_line(self, caplog):
        with caplog.at_level("DEBUG", logger="taskbridge.taskwarrior.commands"):
            CommandLogger().log_request("abc123", ["list", "project:web"])

        payload = json.loads(caplog.records[-1].getMessage().split("Task Request: ", 1)[1])
        assert payload["event"] == "task_request"
        assert payload["request_id"] == "abc123"
        assert payload["args"] == ["list", "project:web"]
        assert set(payload) == {"event", "request_id", "args", "timestamp"}
