"""n8n execution management tools.

Provides MCP tools for listing, inspecting, retrying, stopping and
deleting workflow executions.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)


# =============================================================================
# List Executions Tool
# =============================================================================

class N8nListExecutionsInput(ToolInput):
    """Input schema for n8n_list_executions."""

    workflow_id: Optional[str] = Field(default=None, description="Filter by workflow ID")
    status: Optional[Literal["error", "success", "waiting"]] = Field(
        default=None,
        description="Filter by execution status"
    )
    limit: Optional[int] = Field(default=None, description="Maximum executions to return")
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")
    includeData: Optional[bool] = Field(default=None, description="Include execution data")


@tool(
    name="n8n_list_executions",
    description="List workflow executions with optional filters",
    input_schema=N8nListExecutionsInput,
    tags=["n8n", "executions"],
)
async def n8n_list_executions(params: N8nListExecutionsInput, client: N8nClient) -> Any:
    """List executions, mapping workflow_id onto n8n's workflowId filter."""
    query: Dict[str, Any] = {}
    if params.workflow_id:
        query["workflowId"] = params.workflow_id
    if params.status:
        query["status"] = params.status
    if params.limit:
        query["limit"] = params.limit
    if params.cursor:
        query["cursor"] = params.cursor
    if params.includeData:
        query["includeData"] = True

    logger.info(f"Listing n8n executions ({query})")
    return await client.get("/executions", params=query)


# =============================================================================
# Get Execution Tool
# =============================================================================

class N8nGetExecutionInput(ToolInput):
    """Input schema for n8n_get_execution."""

    execution_id: str = Field(description="Execution ID")
    includeData: Optional[bool] = Field(default=None, description="Include full execution data")


@tool(
    name="n8n_get_execution",
    description="Get details of a specific execution",
    input_schema=N8nGetExecutionInput,
    tags=["n8n", "executions"],
)
async def n8n_get_execution(params: N8nGetExecutionInput, client: N8nClient) -> Any:
    """Get the status and (optionally) the run data of an execution."""
    query = {"includeData": True} if params.includeData else None

    logger.info(f"Getting n8n execution: {params.execution_id}")
    return await client.get(f"/executions/{params.execution_id}", params=query)


# =============================================================================
# Retry / Stop / Delete Execution Tools
# =============================================================================

class N8nRetryExecutionInput(ToolInput):
    """Input schema for n8n_retry_execution."""

    execution_id: str = Field(description="Execution ID to retry")


@tool(
    name="n8n_retry_execution",
    description="Retry a failed execution",
    input_schema=N8nRetryExecutionInput,
    tags=["n8n", "executions"],
)
async def n8n_retry_execution(params: N8nRetryExecutionInput, client: N8nClient) -> Any:
    logger.info(f"Retrying n8n execution: {params.execution_id}")
    return await client.post(f"/executions/{params.execution_id}/retry")


class N8nStopExecutionInput(ToolInput):
    """Input schema for n8n_stop_execution."""

    execution_id: str = Field(description="Execution ID to stop")


@tool(
    name="n8n_stop_execution",
    description="Stop a running execution",
    input_schema=N8nStopExecutionInput,
    tags=["n8n", "executions"],
)
async def n8n_stop_execution(params: N8nStopExecutionInput, client: N8nClient) -> str:
    logger.info(f"Stopping n8n execution: {params.execution_id}")
    await client.post(f"/executions/{params.execution_id}/stop")
    return f"Execution {params.execution_id} stopped"


class N8nDeleteExecutionInput(ToolInput):
    """Input schema for n8n_delete_execution."""

    execution_id: str = Field(description="Execution ID to delete")


@tool(
    name="n8n_delete_execution",
    description="Delete an execution record",
    input_schema=N8nDeleteExecutionInput,
    tags=["n8n", "executions"],
)
async def n8n_delete_execution(params: N8nDeleteExecutionInput, client: N8nClient) -> str:
    logger.info(f"Deleting n8n execution: {params.execution_id}")
    await client.delete(f"/executions/{params.execution_id}")
    return f"Execution {params.execution_id} deleted"
