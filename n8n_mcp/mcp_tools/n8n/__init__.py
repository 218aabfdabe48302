"""n8n automation platform integration tools.

This package provides MCP tools for:
- Managing workflows (CRUD, activation, manual execution)
- Inspecting and controlling executions
- Managing credentials (secrets are never returned) and tags
- Listing node types and active webhooks
- Execution statistics and health checks
- Canned workflow templates

Modules are imported in the order tools are advertised.
"""

from .client import (
    N8nAPIError,
    N8nClient,
    N8nConnectionError,
    N8nError,
    close_client,
    get_client,
    set_client,
)
from .workflows import (
    n8n_list_workflows,
    n8n_get_workflow,
    n8n_create_workflow,
    n8n_update_workflow,
    n8n_delete_workflow,
    n8n_activate_workflow,
    n8n_deactivate_workflow,
    n8n_execute_workflow,
)
from .executions import (
    n8n_list_executions,
    n8n_get_execution,
    n8n_retry_execution,
    n8n_stop_execution,
    n8n_delete_execution,
)
from .credentials import (
    n8n_list_credentials,
    n8n_get_credential,
    n8n_create_credential,
    n8n_update_credential,
    n8n_delete_credential,
)
from .tags import (
    n8n_list_tags,
    n8n_create_tag,
    n8n_update_tag,
    n8n_delete_tag,
    n8n_add_tags_to_workflow,
)
from .nodes import (
    n8n_list_node_types,
    n8n_list_webhooks,
)
from .monitoring import (
    n8n_get_execution_stats,
    n8n_health_check,
)
from .templates import (
    UnknownTemplateError,
    n8n_get_workflow_template,
)

__all__ = [
    # Client
    "N8nClient",
    "N8nError",
    "N8nAPIError",
    "N8nConnectionError",
    "get_client",
    "set_client",
    "close_client",
    # Workflow tools
    "n8n_list_workflows",
    "n8n_get_workflow",
    "n8n_create_workflow",
    "n8n_update_workflow",
    "n8n_delete_workflow",
    "n8n_activate_workflow",
    "n8n_deactivate_workflow",
    "n8n_execute_workflow",
    # Execution tools
    "n8n_list_executions",
    "n8n_get_execution",
    "n8n_retry_execution",
    "n8n_stop_execution",
    "n8n_delete_execution",
    # Credential tools
    "n8n_list_credentials",
    "n8n_get_credential",
    "n8n_create_credential",
    "n8n_update_credential",
    "n8n_delete_credential",
    # Tag tools
    "n8n_list_tags",
    "n8n_create_tag",
    "n8n_update_tag",
    "n8n_delete_tag",
    "n8n_add_tags_to_workflow",
    # Node and webhook tools
    "n8n_list_node_types",
    "n8n_list_webhooks",
    # Monitoring
    "n8n_get_execution_stats",
    "n8n_health_check",
    # Templates
    "UnknownTemplateError",
    "n8n_get_workflow_template",
]
