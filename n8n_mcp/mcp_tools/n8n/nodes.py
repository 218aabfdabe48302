"""n8n node information tools.

The public n8n API has no node-type listing endpoint, so node types come
from a static catalog of common nodes. Webhooks are discovered by
scanning the nodes of active workflows.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)

WEBHOOK_NODE_TYPE = "n8n-nodes-base.webhook"
DEFAULT_WEBHOOK_PATH = "webhook"
DEFAULT_WEBHOOK_METHOD = "GET"

NODE_TYPES: tuple = (
    {"name": "Webhook", "type": "n8n-nodes-base.webhook", "category": "Triggers"},
    {"name": "Schedule Trigger", "type": "n8n-nodes-base.scheduleTrigger", "category": "Triggers"},
    {"name": "HTTP Request", "type": "n8n-nodes-base.httpRequest", "category": "Data"},
    {"name": "Set", "type": "n8n-nodes-base.set", "category": "Data"},
    {"name": "IF", "type": "n8n-nodes-base.if", "category": "Flow"},
    {"name": "Switch", "type": "n8n-nodes-base.switch", "category": "Flow"},
    {"name": "Merge", "type": "n8n-nodes-base.merge", "category": "Flow"},
    {"name": "Code", "type": "n8n-nodes-base.code", "category": "Data"},
    {"name": "Postgres", "type": "n8n-nodes-base.postgres", "category": "Database"},
    {"name": "MySQL", "type": "n8n-nodes-base.mySql", "category": "Database"},
    {"name": "MongoDB", "type": "n8n-nodes-base.mongoDb", "category": "Database"},
    {"name": "Slack", "type": "n8n-nodes-base.slack", "category": "Communication"},
    {"name": "Discord", "type": "n8n-nodes-base.discord", "category": "Communication"},
    {"name": "Email Send", "type": "n8n-nodes-base.emailSend", "category": "Communication"},
    {"name": "Home Assistant", "type": "n8n-nodes-base.homeAssistant", "category": "IoT"},
    {"name": "MQTT", "type": "n8n-nodes-base.mqtt", "category": "IoT"},
)


def filter_node_types(search: Optional[str] = None) -> List[Dict[str, str]]:
    """Return catalog entries whose name or category contains ``search``.

    Matching is case-insensitive. An empty search returns the whole
    catalog.
    """
    nodes = [dict(node) for node in NODE_TYPES]
    if not search:
        return nodes

    needle = search.lower()
    return [
        node for node in nodes
        if needle in node["name"].lower() or needle in node["category"].lower()
    ]


def extract_webhooks(workflows: List[Dict[str, Any]], base_url: str) -> List[Dict[str, Any]]:
    """Collect one record per webhook node across the given workflows.

    Args:
        workflows: Workflow objects as returned by GET /workflows
        base_url: Public n8n URL used to build each webhook URL

    Returns:
        List of {workflowId, workflowName, path, method, url}
    """
    base_url = base_url.rstrip("/")
    webhooks = []

    for workflow in workflows:
        for node in workflow.get("nodes") or []:
            if node.get("type") != WEBHOOK_NODE_TYPE:
                continue

            parameters = node.get("parameters") or {}
            path = parameters.get("path") or DEFAULT_WEBHOOK_PATH
            webhooks.append({
                "workflowId": workflow.get("id"),
                "workflowName": workflow.get("name"),
                "path": path,
                "method": parameters.get("httpMethod") or DEFAULT_WEBHOOK_METHOD,
                "url": f"{base_url}/webhook/{path}",
            })

    return webhooks


# =============================================================================
# List Node Types Tool
# =============================================================================

class N8nListNodeTypesInput(ToolInput):
    """Input schema for n8n_list_node_types."""

    search: Optional[str] = Field(default=None, description="Search term to filter nodes")


@tool(
    name="n8n_list_node_types",
    description="List available node types",
    input_schema=N8nListNodeTypesInput,
    tags=["n8n", "nodes"],
)
async def n8n_list_node_types(params: N8nListNodeTypesInput, client: N8nClient) -> List[Dict[str, str]]:
    return filter_node_types(params.search)


# =============================================================================
# List Webhooks Tool
# =============================================================================

class N8nListWebhooksInput(ToolInput):
    """Input schema for n8n_list_webhooks."""
    pass  # No parameters needed


@tool(
    name="n8n_list_webhooks",
    description="List all active webhooks",
    input_schema=N8nListWebhooksInput,
    tags=["n8n", "webhooks"],
)
async def n8n_list_webhooks(params: N8nListWebhooksInput, client: N8nClient) -> List[Dict[str, Any]]:
    """List webhook endpoints exposed by active workflows."""
    response = await client.get("/workflows", params={"active": True})
    workflows = (response.get("data") if isinstance(response, dict) else None) or []

    webhooks = extract_webhooks(workflows, client.base_url)
    logger.info(f"Found {len(webhooks)} webhooks across {len(workflows)} active workflows")
    return webhooks
