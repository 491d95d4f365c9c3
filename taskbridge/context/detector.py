"""
Context Detector - Works out which project and ticket the user is in.

The detector inspects the filesystem and git, and produces an immutable
ProjectContext snapshot that the rest of the bridge uses to scope
Taskwarrior commands.

Detection Order:
================
```
Project identity (first match wins)
  1. <cwd>/.taskproject         → project = file contents, workspace = cwd
  2. git rev-parse --show-toplevel → project = repo dir name, workspace = top
  3. fallback                   → project = cwd name, no tickets directory

Ticket identity (later sources overwrite earlier ones)
  a. <workspace>/.task-state.json → currentFocus.ticket
  b. git branch --show-current     → branch name, if it looks like a ticket
  (nothing found → keep the last known / explicitly set ticket)
```

Every lookup returns an optional value. A missing marker file, a directory
outside git or an unreadable state file simply contributes nothing;
detect_context() never raises.
"""

import asyncio
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from taskbridge.context.schemas import ProjectContext
from taskbridge.core.config import Settings, settings

logger = logging.getLogger("taskbridge.context")

CHECKLIST_ITEM = re.compile(r"^- \[ \] (.+)")
TODO_ITEM = re.compile(r"TODO[:\s]+(.+)", re.IGNORECASE)


@dataclass
class ProjectIdentity:
    """Outcome of the project detection stage."""
    project: Optional[str]
    workspace_path: Optional[str]
    tickets_path: Optional[str] = None


class ContextDetector:
    """
    Detects project/ticket context and answers ticket questions.

    Usage:
        detector = ContextDetector()
        context = await detector.detect_context()

        detector.format_taskwarrior_project(context)   # "DRX-123" / "web" / "general"
        detector.enhance_task_description("write tests", context)
        tasks = await detector.get_ticket_tasks("DRX-123", context)
    """

    def __init__(self, cwd: Optional[Path] = None, config: Optional[Settings] = None):
        """
        Args:
            cwd: Directory to detect from. Defaults to the process cwd at
                detection time.
            config: Settings override (tests)
        """
        self._cwd = Path(cwd) if cwd else None
        self.config = config or settings
        self._ticket_pattern = re.compile(self.config.TICKET_PATTERN)
        self._current_ticket: Optional[str] = None
        self._context = ProjectContext()

    @property
    def cwd(self) -> Path:
        return self._cwd or Path.cwd()

    # -----------------------------------------------------------------------
    # DETECTION
    # -----------------------------------------------------------------------

    async def detect_context(self) -> ProjectContext:
        """
        Detect the current context and remember it as the latest snapshot.

        Returns:
            ProjectContext (possibly with every field None)
        """
        cwd = self.cwd
        identity = await self._detect_project(cwd)

        workspace = Path(identity.workspace_path) if identity.workspace_path else cwd
        ticket = await self._read_state_ticket(workspace)

        branch_ticket = await self._detect_branch_ticket(cwd)
        if branch_ticket:
            ticket = branch_ticket

        if ticket:
            self._current_ticket = ticket

        self._context = ProjectContext(
            current_ticket=self._current_ticket,
            current_project=identity.project,
            workspace_path=identity.workspace_path,
            tickets_path=identity.tickets_path,
        )
        logger.debug(f"Detected context: {self._context.model_dump()}")
        return self._context

    def get_context(self) -> ProjectContext:
        """Return the latest snapshot without probing anything."""
        return self._context

    def set_current_ticket(self, ticket: str) -> ProjectContext:
        """
        Override the current ticket.

        The override sticks until a later detection finds a ticket of its own.
        """
        self._current_ticket = ticket or None
        self._context = self._context.with_ticket(self._current_ticket)
        logger.info(f"Current ticket set to {self._current_ticket}")
        return self._context

    async def _detect_project(self, cwd: Path) -> ProjectIdentity:
        marker_project = await self._read_marker(cwd)
        if marker_project:
            return ProjectIdentity(
                project=marker_project,
                workspace_path=str(cwd),
                tickets_path=str(cwd / self.config.TICKETS_DIR),
            )

        top_level = await self._git("rev-parse", "--show-toplevel", cwd=cwd)
        if top_level:
            repo = Path(top_level)
            return ProjectIdentity(
                project=repo.name or self.config.DEFAULT_PROJECT,
                workspace_path=str(repo),
                tickets_path=str(repo / self.config.TICKETS_DIR),
            )

        return ProjectIdentity(
            project=cwd.name or self.config.DEFAULT_PROJECT,
            workspace_path=str(cwd),
        )

    async def _read_marker(self, cwd: Path) -> Optional[str]:
        content = await self._read_text(cwd / self.config.PROJECT_MARKER_FILE)
        if content is None:
            return None
        return content.strip() or None

    async def _read_state_ticket(self, workspace: Path) -> Optional[str]:
        content = await self._read_text(workspace / self.config.TASK_STATE_FILE)
        if content is None:
            return None

        try:
            state = json.loads(content)
        except ValueError as e:
            logger.debug(f"Ignoring unreadable task state file: {e}")
            return None

        focus = state.get("currentFocus") if isinstance(state, dict) else None
        ticket = focus.get("ticket") if isinstance(focus, dict) else None
        if isinstance(ticket, str) and ticket.strip():
            return ticket.strip()
        return None

    async def _detect_branch_ticket(self, cwd: Path) -> Optional[str]:
        branch = await self._git("branch", "--show-current", cwd=cwd)
        if branch and self._ticket_pattern.match(branch):
            return branch
        return None

    async def _git(self, *args: str, cwd: Path) -> Optional[str]:
        """
        Run a git query and return its trimmed stdout.

        Returns:
            Output string, or None when git is missing, fails, times out or
            prints nothing.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.config.GIT_BINARY,
                *args,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug(f"git {' '.join(args)} could not start: {e}")
            return None

        try:
            stdout, _ = await asyncio.wait_for(
                process.communicate(), timeout=self.config.GIT_COMMAND_TIMEOUT
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.warning(f"git {' '.join(args)} timed out")
            return None

        if process.returncode != 0:
            return None
        return stdout.decode("utf-8", errors="replace").strip() or None

    # -----------------------------------------------------------------------
    # TICKETS
    # -----------------------------------------------------------------------

    async def get_ticket_tasks(
        self,
        ticket: str,
        context: Optional[ProjectContext] = None,
    ) -> List[str]:
        """
        Collect open tasks recorded for a ticket.

        Reads `- [ ] <text>` lines from the checklist file, then every
        `TODO: <text>` / `TODO <text>` from the notes file.

        Args:
            ticket: Ticket identifier (directory name under the tickets path)
            context: Snapshot to read the tickets path from (latest if omitted)

        Returns:
            Task texts in document order, checklist items first
        """
        context = self._context if context is None else context
        if not context.tickets_path:
            return []

        ticket_dir = Path(context.tickets_path) / ticket
        tasks: List[str] = []

        checklist = await self._read_text(ticket_dir / self.config.CHECKLIST_FILE)
        if checklist:
            for line in checklist.splitlines():
                match = CHECKLIST_ITEM.match(line)
                if match:
                    tasks.append(match.group(1))

        notes = await self._read_text(ticket_dir / self.config.NOTES_FILE)
        if notes:
            for match in TODO_ITEM.finditer(notes):
                text = match.group(1).strip()
                if text:
                    tasks.append(text)

        return tasks

    async def list_tickets(self, context: Optional[ProjectContext] = None) -> List[str]:
        """
        List ticket directories under the tickets path.

        Returns:
            Sorted directory names starting with the ticket prefix; empty
            when there is no tickets path or it cannot be read
        """
        context = self._context if context is None else context
        if not context.tickets_path:
            return []

        try:
            names = await asyncio.to_thread(self._scan_ticket_dirs, Path(context.tickets_path))
        except OSError as e:
            logger.debug(f"Cannot list tickets in {context.tickets_path}: {e}")
            return []
        return sorted(names)

    def _scan_ticket_dirs(self, tickets_path: Path) -> List[str]:
        with os.scandir(tickets_path) as entries:
            return [
                entry.name
                for entry in entries
                if entry.is_dir() and entry.name.startswith(self.config.TICKET_PREFIX)
            ]

    # -----------------------------------------------------------------------
    # SCOPING HELPERS
    # -----------------------------------------------------------------------

    def format_taskwarrior_project(self, context: Optional[ProjectContext] = None) -> str:
        """Ticket, else project, else the default label."""
        context = self._context if context is None else context
        if context.current_ticket:
            return context.current_ticket
        if context.current_project:
            return context.current_project
        return self.config.DEFAULT_PROJECT

    def scope_filter(self, context: Optional[ProjectContext] = None) -> List[str]:
        """
        Filter arguments restricting a command to the current scope.

        Same chain as format_taskwarrior_project(), except that an empty
        context yields no filter at all rather than the default label.
        """
        context = self._context if context is None else context
        if context.current_ticket:
            return [f"+{context.current_ticket}"]
        if context.current_project:
            return [f"project:{context.current_project}"]
        return []

    def enhance_task_description(
        self,
        description: str,
        context: Optional[ProjectContext] = None,
    ) -> str:
        """
        Tag a task description with the current ticket and project.

        Applying it twice gives the same result as applying it once.
        """
        context = self._context if context is None else context
        parts = [description]

        if context.current_ticket and context.current_ticket not in description:
            parts.append(f"+{context.current_ticket}")

        if context.current_project and "project:" not in description:
            parts.append(f"project:{context.current_project}")

        return " ".join(parts)

    # -----------------------------------------------------------------------
    # FILE HELPERS
    # -----------------------------------------------------------------------

    async def _read_text(self, path: Path) -> Optional[str]:
        """Read a UTF-8 file, or None if it is missing or unreadable."""
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {path}: {e}")
            return None


context_detector = ContextDetector()
