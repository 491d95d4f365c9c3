"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Settings isolated from the developer's environment
- FakeTaskwarrior: records commands instead of running `task`
- Context detectors rooted in a temporary directory, with git mocked out
- Tool services wired to the fakes
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
from unittest.mock import AsyncMock

import pytest

from taskbridge.context.detector import ContextDetector
from taskbridge.core.config import Settings
from taskbridge.core.errors import TaskwarriorError
from taskbridge.services.prompt_service import PromptService
from taskbridge.services.tool_service import ToolService
from taskbridge.taskwarrior.executor import TaskwarriorExecutor, TaskwarriorResponse


# ---------------------------------------------------------------------------
# SAMPLE OUTPUT
# ---------------------------------------------------------------------------

LIST_OUTPUT = """
ID Age  Project Description         Urg
-- ---- ------- ------------------- ----
 1 2d   web     Fix the login bug    8.9
 2 5h   web     Write release notes  1.2

2 tasks
"""


# ---------------------------------------------------------------------------
# FAKES
# ---------------------------------------------------------------------------

class FakeTaskwarrior(TaskwarriorExecutor):
    """
    Executor double that records argument lists.

    outputs maps a space-joined command (e.g. "next limit:5") to stdout;
    fail_when decides which commands raise TaskwarriorError.
    """

    def __init__(
        self,
        config: Settings,
        outputs: Optional[Dict[str, str]] = None,
        default_output: str = "",
        fail_when: Optional[Callable[[List[str]], bool]] = None,
    ):
        super().__init__(config=config)
        self.outputs = outputs or {}
        self.default_output = default_output
        self.fail_when = fail_when
        self.calls: List[List[str]] = []

    async def execute(self, args: Sequence[str]) -> TaskwarriorResponse:
        args = list(args)
        self.calls.append(args)
        if self.fail_when and self.fail_when(args):
            raise TaskwarriorError(f"Command failed: task {' '.join(args)}", args=args, return_code=1)
        stdout = self.outputs.get(" ".join(args), self.default_output)
        return TaskwarriorResponse(args=args, stdout=stdout)


# ---------------------------------------------------------------------------
# SETTINGS / DETECTOR FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings() -> Settings:
    """Defaults only; ignores any .env file and TASKRC-style overrides."""
    return Settings(_env_file=None, TASK_RC_OVERRIDES=[], TASK_COMMAND_TIMEOUT=5.0)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty project directory named "web"."""
    path = tmp_path / "web"
    path.mkdir()
    return path


@pytest.fixture
def make_detector(workspace: Path, test_settings: Settings):
    """
    Build a ContextDetector in `workspace` with git answers scripted.

    Usage:
        detector = make_detector(toplevel="/src/repo", branch="DRX-1")
    """
    def _make(
        toplevel: Optional[str] = None,
        branch: Optional[str] = None,
        cwd: Optional[Path] = None,
    ) -> ContextDetector:
        detector = ContextDetector(cwd=cwd or workspace, config=test_settings)

        async def fake_git(*args: str, cwd: Path) -> Optional[str]:
            if args == ("rev-parse", "--show-toplevel"):
                return toplevel
            if args == ("branch", "--show-current"):
                return branch
            return None

        detector._git = AsyncMock(side_effect=fake_git)
        return detector

    return _make


@pytest.fixture
def detector(make_detector) -> ContextDetector:
    """Detector outside any git repository."""
    return make_detector()


@pytest.fixture
def fake_taskwarrior(test_settings: Settings) -> FakeTaskwarrior:
    return FakeTaskwarrior(config=test_settings)


@pytest.fixture
def tool_service(detector: ContextDetector, fake_taskwarrior: FakeTaskwarrior) -> ToolService:
    return ToolService(detector=detector, executor=fake_taskwarrior)


@pytest.fixture
def prompt_service(fake_taskwarrior: FakeTaskwarrior) -> PromptService:
    return PromptService(executor=fake_taskwarrior)


@pytest.fixture
def list_output() -> str:
    """A `task list` report with two rows and a summary line."""
    return LIST_OUTPUT
