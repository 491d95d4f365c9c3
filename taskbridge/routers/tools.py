"""
Tools Router - HTTP endpoints for the bridge's tools and prompts.

This router exposes the same tools as the MCP server for callers that
speak HTTP. It delegates all business logic to ToolService/PromptService.

Architecture:
=============
```
POST /tools/task_natural {"query": "show urgent tasks"}
         │
         ▼
┌─────────────────┐
│  Tools Router   │  ← HTTP handling only (this file)
└────────┬────────┘
         ▼
┌─────────────────┐
│  Tool Service   │  ← validation + routing
└────────┬────────┘
         ▼
┌─────────────────┐
│   Taskwarrior   │
└─────────────────┘
```
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import BaseModel, Field

from taskbridge.core.errors import TaskwarriorError, UnknownPromptError
from taskbridge.services.prompt_service import prompt_service
from taskbridge.services.tool_result import ToolErrorKind
from taskbridge.services.tool_service import tool_service
from taskbridge.tools.registry import tool_registry


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(tags=["tools"])

ERROR_STATUS = {
    ToolErrorKind.INVALID_ARGUMENTS: 422,
    ToolErrorKind.UNKNOWN_TOOL: status.HTTP_404_NOT_FOUND,
    ToolErrorKind.EXECUTION: status.HTTP_502_BAD_GATEWAY,
    ToolErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class ToolInfo(BaseModel):
    """One entry of GET /tools."""
    name: str
    description: str
    input_schema: Dict[str, Any]
    examples: List[Dict[str, Any]] = Field(default_factory=list)


class ToolResponse(BaseModel):
    """
    Response schema for POST /tools/{name}.

    Example:
    {
        "success": true,
        "tool_name": "task_natural",
        "text": "Current tasks:\\n1 2d web Fix the login bug 8.9",
        "data": {"intent": "list", "command": "list project:web"}
    }
    """
    success: bool = Field(description="Whether the tool completed")
    tool_name: str = Field(description="Tool that was called")
    text: str = Field(description="Text payload")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Structured extras")
    error_kind: Optional[str] = Field(default=None, description="Failure category")
    processing_time_ms: Optional[float] = Field(default=None, description="Processing time")
    request_id: Optional[str] = Field(default=None, description="Request tracking ID")


class PromptInfo(BaseModel):
    name: str
    description: str


class PromptResponse(BaseModel):
    name: str
    description: str
    text: str


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.get("/tools", response_model=List[ToolInfo])
async def list_tools():
    """List every tool with its JSON input schema."""
    return [
        ToolInfo(
            name=tool.name,
            description=tool.description,
            input_schema=tool.input_schema,
            examples=tool.examples,
        )
        for tool in tool_registry.list_tools()
    ]


@router.post("/tools/{name}", response_model=ToolResponse)
async def call_tool(name: str, arguments: Optional[Dict[str, Any]] = Body(default=None)):
    """
    Call a tool. The JSON body holds the tool's arguments.

    Failures are returned as HTTP errors whose detail is the full
    ToolResponse:
    - 422: invalid arguments
    - 404: unknown tool
    - 502: Taskwarrior failed
    - 500: anything else
    """
    result = await tool_service.call(name, arguments)
    response = ToolResponse(**result.to_dict())

    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=response.model_dump(),
        )
    return response


@router.get("/prompts", response_model=List[PromptInfo])
async def list_prompts():
    return [
        PromptInfo(name=prompt.name, description=prompt.description)
        for prompt in prompt_service.list_prompts()
    ]


@router.post("/prompts/{name}", response_model=PromptResponse)
async def render_prompt(name: str):
    """Render a review prompt with live Taskwarrior output."""
    try:
        definition = prompt_service.get_prompt(name)
        text = await prompt_service.render(name)
    except UnknownPromptError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TaskwarriorError as e:
        logger.warning(f"Prompt {name} failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return PromptResponse(name=definition.name, description=definition.description, text=text)
