"""
Command Logger - Structured logging for Taskwarrior invocations.

This module provides:
- configure_logging(): one-time setup of the "taskbridge" logger tree
- CommandLogger: JSON log lines for every Taskwarrior request/response

Log Format:
==========
Each command log entry includes:
- Timestamp
- Request ID (for tracing)
- The argv passed to Taskwarrior
- Return code and latency
- A preview of stdout (truncated)

All handlers write to stderr. When the bridge runs as an MCP stdio server,
stdout carries the protocol stream and must stay clean.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PREVIEW_LENGTH = 100

logger = logging.getLogger("taskbridge.taskwarrior.commands")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the "taskbridge" logger tree.

    Safe to call more than once; the stderr handler is only added the
    first time.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The root "taskbridge" logger
    """
    root = logging.getLogger("taskbridge")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)

    return root


def _preview(text: str) -> str:
    text = text.strip()
    return text[:PREVIEW_LENGTH] + "..." if len(text) > PREVIEW_LENGTH else text


class CommandLogger:
    """
    Structured logger for Taskwarrior invocations.

    Usage:
        command_logger = CommandLogger()

        command_logger.log_request("abc123", ["list", "project:web"])
        command_logger.log_response("abc123", return_code=0, stdout=out, latency_ms=12.5)
    """

    def __init__(self, target: Optional[logging.Logger] = None):
        self._logger = target or logger

    def log_request(self, request_id: str, args: Sequence[str]) -> None:
        """
        Log a Taskwarrior request before the process is spawned.

        Args:
            request_id: Unique request identifier
            args: Arguments after the executable name
        """
        log_data = {
            "event": "task_request",
            "request_id": request_id,
            "args": list(args),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        self._logger.debug(f"Task Request: {json.dumps(log_data)}")

    def log_response(
        self,
        request_id: str,
        return_code: int,
        stdout: str,
        latency_ms: float,
    ) -> None:
        log_data = {
            "event": "task_response",
            "request_id": request_id,
            "return_code": return_code,
            "latency_ms": round(latency_ms, 2),
            "output_length": len(stdout),
            "output_preview": _preview(stdout),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        self._logger.info(f"Task Response: {json.dumps(log_data)}")

    def log_error(
        self,
        request_id: str,
        error: str,
        return_code: Optional[int] = None,
    ) -> None:
        log_data = {
            "event": "task_error",
            "request_id": request_id,
            "error": error,
            "return_code": return_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        self._logger.error(f"Task Error: {json.dumps(log_data)}")


command_logger = CommandLogger()
