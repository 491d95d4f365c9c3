"""
Taskbridge - natural-language, context-aware bridge to Taskwarrior.

Exposed to AI agents as an MCP stdio server (taskbridge.server) and as a
FastAPI app (taskbridge.main).
"""

__version__ = "0.1.0"
