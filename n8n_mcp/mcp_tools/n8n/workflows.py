"""n8n workflow management tools.

Provides MCP tools for:
- Listing and viewing workflows
- Creating, updating and deleting workflows
- Activating and deactivating workflows
- Executing workflows manually
"""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)


# =============================================================================
# List Workflows Tool
# =============================================================================

class N8nListWorkflowsInput(ToolInput):
    """Input schema for n8n_list_workflows."""

    active: Optional[bool] = Field(default=None, description="Filter by active status")
    tags: Optional[List[str]] = Field(default=None, description="Filter by tag names")
    limit: Optional[int] = Field(default=None, description="Maximum number of workflows to return")
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")


@tool(
    name="n8n_list_workflows",
    description="List all workflows in n8n",
    input_schema=N8nListWorkflowsInput,
    tags=["n8n", "workflows"],
)
async def n8n_list_workflows(params: N8nListWorkflowsInput, client: N8nClient) -> Any:
    """List workflows, forwarding only the filters that were supplied."""
    query: Dict[str, Any] = {}
    if params.active is not None:
        query["active"] = params.active
    if params.tags:
        query["tags"] = ",".join(params.tags)
    if params.limit:
        query["limit"] = params.limit
    if params.cursor:
        query["cursor"] = params.cursor

    logger.info(f"Listing n8n workflows ({query})")
    return await client.get("/workflows", params=query)


# =============================================================================
# Get Workflow Tool
# =============================================================================

class N8nGetWorkflowInput(ToolInput):
    """Input schema for n8n_get_workflow."""

    workflow_id: str = Field(description="Workflow ID")


@tool(
    name="n8n_get_workflow",
    description="Get detailed information about a specific workflow",
    input_schema=N8nGetWorkflowInput,
    tags=["n8n", "workflows"],
)
async def n8n_get_workflow(params: N8nGetWorkflowInput, client: N8nClient) -> Any:
    """Get the full workflow definition including nodes and connections."""
    logger.info(f"Getting n8n workflow: {params.workflow_id}")
    return await client.get(f"/workflows/{params.workflow_id}")


# =============================================================================
# Create Workflow Tool
# =============================================================================

class N8nCreateWorkflowInput(ToolInput):
    """Input schema for n8n_create_workflow."""

    name: str = Field(description="Workflow name")
    nodes: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Array of node configurations"
    )
    connections: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Node connections configuration"
    )
    settings: Optional[Dict[str, Any]] = Field(default=None, description="Workflow settings")
    staticData: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Static data for the workflow"
    )


@tool(
    name="n8n_create_workflow",
    description="Create a new workflow",
    input_schema=N8nCreateWorkflowInput,
    tags=["n8n", "workflows"],
)
async def n8n_create_workflow(params: N8nCreateWorkflowInput, client: N8nClient) -> Any:
    """Create a workflow; omitted graph parts default to empty."""
    payload = {
        "name": params.name,
        "nodes": params.nodes or [],
        "connections": params.connections or {},
        "settings": params.settings or {},
        "staticData": params.staticData,
    }

    logger.info(f"Creating n8n workflow: {params.name}")
    return await client.post("/workflows", json=payload)


# =============================================================================
# Update Workflow Tool
# =============================================================================

class N8nUpdateWorkflowInput(ToolInput):
    """Input schema for n8n_update_workflow.

    Unknown fields are kept and forwarded to n8n unchanged.
    """

    model_config = ConfigDict(extra="allow")

    workflow_id: str = Field(description="Workflow ID")
    name: Optional[str] = Field(default=None, description="New workflow name")
    nodes: Optional[List[Dict[str, Any]]] = Field(default=None, description="Updated nodes")
    connections: Optional[Dict[str, Any]] = Field(default=None, description="Updated connections")
    settings: Optional[Dict[str, Any]] = Field(default=None, description="Updated settings")


@tool(
    name="n8n_update_workflow",
    description="Update an existing workflow",
    input_schema=N8nUpdateWorkflowInput,
    tags=["n8n", "workflows"],
)
async def n8n_update_workflow(params: N8nUpdateWorkflowInput, client: N8nClient) -> Any:
    """Patch a workflow with every supplied field except the ID."""
    update = params.model_dump(exclude={"workflow_id"}, exclude_unset=True)

    logger.info(f"Updating n8n workflow {params.workflow_id}: {sorted(update)}")
    return await client.patch(f"/workflows/{params.workflow_id}", json=update)


# =============================================================================
# Delete Workflow Tool
# =============================================================================

class N8nDeleteWorkflowInput(ToolInput):
    """Input schema for n8n_delete_workflow."""

    workflow_id: str = Field(description="Workflow ID to delete")


@tool(
    name="n8n_delete_workflow",
    description="Delete a workflow",
    input_schema=N8nDeleteWorkflowInput,
    tags=["n8n", "workflows"],
)
async def n8n_delete_workflow(params: N8nDeleteWorkflowInput, client: N8nClient) -> str:
    logger.info(f"Deleting n8n workflow: {params.workflow_id}")
    await client.delete(f"/workflows/{params.workflow_id}")
    return f"Workflow {params.workflow_id} deleted successfully"


# =============================================================================
# Activate / Deactivate Workflow Tools
# =============================================================================

class N8nWorkflowIdInput(ToolInput):
    """Input schema for tools that only need a workflow ID."""

    workflow_id: str = Field(description="Workflow ID")


@tool(
    name="n8n_activate_workflow",
    description="Activate a workflow",
    input_schema=N8nWorkflowIdInput,
    tags=["n8n", "workflows"],
)
async def n8n_activate_workflow(params: N8nWorkflowIdInput, client: N8nClient) -> Any:
    logger.info(f"Activating n8n workflow: {params.workflow_id}")
    return await client.patch(f"/workflows/{params.workflow_id}", json={"active": True})


@tool(
    name="n8n_deactivate_workflow",
    description="Deactivate a workflow",
    input_schema=N8nWorkflowIdInput,
    tags=["n8n", "workflows"],
)
async def n8n_deactivate_workflow(params: N8nWorkflowIdInput, client: N8nClient) -> Any:
    logger.info(f"Deactivating n8n workflow: {params.workflow_id}")
    return await client.patch(f"/workflows/{params.workflow_id}", json={"active": False})


# =============================================================================
# Execute Workflow Tool
# =============================================================================

class N8nExecuteWorkflowInput(ToolInput):
    """Input schema for n8n_execute_workflow."""

    workflow_id: str = Field(description="Workflow ID")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Input data for the workflow")


@tool(
    name="n8n_execute_workflow",
    description="Execute a workflow manually with optional input data",
    input_schema=N8nExecuteWorkflowInput,
    tags=["n8n", "workflows"],
)
async def n8n_execute_workflow(params: N8nExecuteWorkflowInput, client: N8nClient) -> Any:
    """Run a workflow and return the execution record."""
    logger.info(f"Executing n8n workflow: {params.workflow_id}")
    return await client.post(
        f"/workflows/{params.workflow_id}/execute",
        json={"data": params.data or {}},
    )
