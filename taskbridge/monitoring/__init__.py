"""
Monitoring Module - Logging setup and command tracing.

Usage:
======
    from taskbridge.monitoring import configure_logging, command_logger

    configure_logging("DEBUG")
    command_logger.log_request(request_id, ["list"])
"""

from taskbridge.monitoring.logger import CommandLogger, command_logger, configure_logging

__all__ = [
    "CommandLogger",
    "command_logger",
    "configure_logging",
]
