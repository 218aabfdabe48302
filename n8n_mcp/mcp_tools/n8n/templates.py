"""Canned n8n workflow templates for common automation patterns.

Each template is a complete workflow document (name, nodes, connections)
that can be passed straight to n8n_create_workflow. Connections link
nodes by name through the "main" output, index 0.
"""

import copy
from typing import Any, Dict

from pydantic import Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)


class UnknownTemplateError(ValueError):
    """Requested template type is not in the catalog."""

    def __init__(self, template_type: str):
        available = ", ".join(WORKFLOW_TEMPLATES)
        super().__init__(f"Unknown template type: {template_type}. Available: {available}")
        self.template_type = template_type


def _link(target: str) -> Dict[str, Any]:
    return {"main": [[{"node": target, "type": "main", "index": 0}]]}


WORKFLOW_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "webhook_trigger": {
        "name": "Webhook Triggered Workflow",
        "nodes": [
            {
                "parameters": {
                    "path": "webhook-endpoint",
                    "responseMode": "responseNode",
                },
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [250, 300],
            },
            {
                "parameters": {},
                "name": "Respond to Webhook",
                "type": "n8n-nodes-base.respondToWebhook",
                "position": [450, 300],
            },
        ],
        "connections": {
            "Webhook": _link("Respond to Webhook"),
        },
    },
    "schedule_trigger": {
        "name": "Scheduled Workflow",
        "nodes": [
            {
                "parameters": {
                    "rule": {
                        "interval": [{"field": "hours", "hoursInterval": 1}],
                    },
                },
                "name": "Schedule Trigger",
                "type": "n8n-nodes-base.scheduleTrigger",
                "position": [250, 300],
            },
            {
                "parameters": {},
                "name": "No Operation",
                "type": "n8n-nodes-base.noOp",
                "position": [450, 300],
            },
        ],
        "connections": {
            "Schedule Trigger": _link("No Operation"),
        },
    },
    "http_request": {
        "name": "HTTP Request Workflow",
        "nodes": [
            {
                "parameters": {"path": "trigger"},
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [250, 300],
            },
            {
                "parameters": {
                    "url": "https://api.example.com/endpoint",
                    "method": "GET",
                    "options": {},
                },
                "name": "HTTP Request",
                "type": "n8n-nodes-base.httpRequest",
                "position": [450, 300],
            },
        ],
        "connections": {
            "Webhook": _link("HTTP Request"),
        },
    },
    "email_notification": {
        "name": "Email Notification Workflow",
        "nodes": [
            {
                "parameters": {"path": "notify"},
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [250, 300],
            },
            {
                "parameters": {
                    "fromEmail": "noreply@example.com",
                    "toEmail": "recipient@example.com",
                    "subject": "Notification",
                    "text": "You have a new notification",
                },
                "name": "Send Email",
                "type": "n8n-nodes-base.emailSend",
                "position": [450, 300],
            },
        ],
        "connections": {
            "Webhook": _link("Send Email"),
        },
    },
    "database_query": {
        "name": "Database Query Workflow",
        "nodes": [
            {
                "parameters": {
                    "rule": {
                        "interval": [{"field": "days", "daysInterval": 1}],
                    },
                },
                "name": "Schedule Trigger",
                "type": "n8n-nodes-base.scheduleTrigger",
                "position": [250, 300],
            },
            {
                "parameters": {
                    "operation": "executeQuery",
                    "query": "SELECT * FROM records WHERE created_at > NOW() - INTERVAL '1 day'",
                },
                "name": "Postgres",
                "type": "n8n-nodes-base.postgres",
                "position": [450, 300],
            },
            {
                "parameters": {
                    "jsCode": "return [{ json: { count: $input.all().length } }];",
                },
                "name": "Code",
                "type": "n8n-nodes-base.code",
                "position": [650, 300],
            },
        ],
        "connections": {
            "Schedule Trigger": _link("Postgres"),
            "Postgres": _link("Code"),
        },
    },
    "file_processor": {
        "name": "File Processor Workflow",
        "nodes": [
            {
                "parameters": {
                    "triggerOn": "folder",
                    "path": "/data/incoming",
                    "events": ["add"],
                },
                "name": "Local File Trigger",
                "type": "n8n-nodes-base.localFileTrigger",
                "position": [250, 300],
            },
            {
                "parameters": {
                    "fileSelector": "={{ $json.path }}",
                },
                "name": "Read File",
                "type": "n8n-nodes-base.readWriteFile",
                "position": [450, 300],
            },
            {
                "parameters": {"operation": "csv"},
                "name": "Extract From File",
                "type": "n8n-nodes-base.extractFromFile",
                "position": [650, 300],
            },
        ],
        "connections": {
            "Local File Trigger": _link("Read File"),
            "Read File": _link("Extract From File"),
        },
    },
    "api_integration": {
        "name": "API Integration Workflow",
        "nodes": [
            {
                "parameters": {
                    "path": "api-sync",
                    "httpMethod": "POST",
                    "responseMode": "responseNode",
                },
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [250, 300],
            },
            {
                "parameters": {
                    "url": "https://api.example.com/resources",
                    "method": "POST",
                    "sendBody": True,
                    "options": {},
                },
                "name": "HTTP Request",
                "type": "n8n-nodes-base.httpRequest",
                "position": [450, 300],
            },
            {
                "parameters": {"respondWith": "json"},
                "name": "Respond to Webhook",
                "type": "n8n-nodes-base.respondToWebhook",
                "position": [650, 300],
            },
        ],
        "connections": {
            "Webhook": _link("HTTP Request"),
            "HTTP Request": _link("Respond to Webhook"),
        },
    },
}

TEMPLATE_TYPES = list(WORKFLOW_TEMPLATES)


def get_template(template_type: str) -> Dict[str, Any]:
    """Return a copy of the stored template.

    Raises:
        UnknownTemplateError: If the template type is not in the catalog
    """
    template = WORKFLOW_TEMPLATES.get(template_type)
    if template is None:
        raise UnknownTemplateError(template_type)
    return copy.deepcopy(template)


class N8nGetWorkflowTemplateInput(ToolInput):
    """Input schema for n8n_get_workflow_template.

    The enum is advertised to callers but not enforced here, so an
    unknown type gets the catalog listing instead of a validation error.
    """

    template_type: str = Field(
        description="Type of workflow template",
        json_schema_extra={"enum": TEMPLATE_TYPES},
    )


@tool(
    name="n8n_get_workflow_template",
    description="Get a workflow template for common automation patterns",
    input_schema=N8nGetWorkflowTemplateInput,
    tags=["n8n", "templates"],
)
async def n8n_get_workflow_template(params: N8nGetWorkflowTemplateInput, client: N8nClient) -> Dict[str, Any]:
    return get_template(params.template_type)
