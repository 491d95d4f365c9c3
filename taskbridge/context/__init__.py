"""
Context Module - Project and ticket awareness.

Example Flow:
============
Working in ~/src/web on branch DRX-12345-login:

ContextDetector.detect_context() returns
{
    "current_ticket": "DRX-12345-login",
    "current_project": "web",
    "workspace_path": "/home/me/src/web",
    "tickets_path": "/home/me/src/web/.tickets"
}

which scopes "show my tasks" to `task list +DRX-12345-login`.
"""

from taskbridge.context.schemas import ProjectContext
from taskbridge.context.detector import ContextDetector, ProjectIdentity, context_detector

__all__ = [
    "ProjectContext",
    "ProjectIdentity",
    "ContextDetector",
    "context_detector",
]
