"""n8n tag management tools."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)


class N8nListTagsInput(ToolInput):
    """Input schema for n8n_list_tags."""

    limit: Optional[int] = Field(default=None, description="Maximum tags to return")
    cursor: Optional[str] = Field(default=None, description="Pagination cursor")


@tool(
    name="n8n_list_tags",
    description="List all tags",
    input_schema=N8nListTagsInput,
    tags=["n8n", "tags"],
)
async def n8n_list_tags(params: N8nListTagsInput, client: N8nClient) -> Any:
    query: Dict[str, Any] = {}
    if params.limit:
        query["limit"] = params.limit
    if params.cursor:
        query["cursor"] = params.cursor

    return await client.get("/tags", params=query)


class N8nCreateTagInput(ToolInput):
    """Input schema for n8n_create_tag."""

    name: str = Field(description="Tag name")


@tool(
    name="n8n_create_tag",
    description="Create a new tag",
    input_schema=N8nCreateTagInput,
    tags=["n8n", "tags"],
)
async def n8n_create_tag(params: N8nCreateTagInput, client: N8nClient) -> Any:
    logger.info(f"Creating n8n tag: {params.name}")
    return await client.post("/tags", json={"name": params.name})


class N8nUpdateTagInput(ToolInput):
    """Input schema for n8n_update_tag."""

    tag_id: str = Field(description="Tag ID")
    name: str = Field(description="New tag name")


@tool(
    name="n8n_update_tag",
    description="Update a tag",
    input_schema=N8nUpdateTagInput,
    tags=["n8n", "tags"],
)
async def n8n_update_tag(params: N8nUpdateTagInput, client: N8nClient) -> Any:
    logger.info(f"Renaming n8n tag {params.tag_id} to {params.name}")
    return await client.patch(f"/tags/{params.tag_id}", json={"name": params.name})


class N8nDeleteTagInput(ToolInput):
    """Input schema for n8n_delete_tag."""

    tag_id: str = Field(description="Tag ID to delete")


@tool(
    name="n8n_delete_tag",
    description="Delete a tag",
    input_schema=N8nDeleteTagInput,
    tags=["n8n", "tags"],
)
async def n8n_delete_tag(params: N8nDeleteTagInput, client: N8nClient) -> str:
    logger.info(f"Deleting n8n tag: {params.tag_id}")
    await client.delete(f"/tags/{params.tag_id}")
    return f"Tag {params.tag_id} deleted"


# =============================================================================
# Add Tags To Workflow Tool
# =============================================================================

class N8nAddTagsToWorkflowInput(ToolInput):
    """Input schema for n8n_add_tags_to_workflow."""

    workflow_id: str = Field(description="Workflow ID")
    tag_ids: List[str] = Field(description="Tag IDs to add")


@tool(
    name="n8n_add_tags_to_workflow",
    description="Add tags to a workflow",
    input_schema=N8nAddTagsToWorkflowInput,
    tags=["n8n", "tags", "workflows"],
)
async def n8n_add_tags_to_workflow(params: N8nAddTagsToWorkflowInput, client: N8nClient) -> Any:
    """Append tags to a workflow's existing tag list.

    This is a read-modify-write with no version check: a change made to
    the workflow's tags between the GET and the PATCH is overwritten, and
    tag IDs already present are appended again.
    """
    workflow = await client.get(f"/workflows/{params.workflow_id}")
    existing = (workflow.get("tags") if isinstance(workflow, dict) else None) or []
    merged = list(existing) + [{"id": tag_id} for tag_id in params.tag_ids]

    logger.info(
        f"Adding tags {params.tag_ids} to n8n workflow {params.workflow_id} "
        f"({len(existing)} existing)"
    )
    return await client.patch(f"/workflows/{params.workflow_id}", json={"tags": merged})
