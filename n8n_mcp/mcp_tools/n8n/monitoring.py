"""n8n monitoring tools: execution statistics and health check."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ...logging_config import get_logger
from ...tool_registry import ToolInput, tool
from .client import N8nClient

logger = get_logger(__name__)

STATS_SAMPLE_SIZE = 100
EXECUTION_STATUSES = ("success", "error", "waiting", "running")


def compute_execution_stats(executions: List[Dict[str, Any]]) -> Dict[str, int]:
    """Tally executions by status.

    Statuses outside success/error/waiting/running only count toward
    ``total``.
    """
    stats = {"total": len(executions)}
    for status in EXECUTION_STATUSES:
        stats[status] = sum(1 for e in executions if e.get("status") == status)
    return stats


# =============================================================================
# Execution Stats Tool
# =============================================================================

class N8nGetExecutionStatsInput(ToolInput):
    """Input schema for n8n_get_execution_stats."""

    workflow_id: Optional[str] = Field(default=None, description="Filter by workflow ID")
    period: Optional[Literal["day", "week", "month"]] = Field(
        default=None,
        description="Time period for statistics"
    )


@tool(
    name="n8n_get_execution_stats",
    description="Get execution statistics",
    input_schema=N8nGetExecutionStatsInput,
    tags=["n8n", "executions", "stats"],
)
async def n8n_get_execution_stats(params: N8nGetExecutionStatsInput, client: N8nClient) -> Dict[str, int]:
    """Compute status counts over the most recent executions.

    Only the latest 100 executions are sampled. ``period`` is accepted
    but does not narrow the sample.
    """
    query: Dict[str, Any] = {"limit": STATS_SAMPLE_SIZE}
    if params.workflow_id:
        query["workflowId"] = params.workflow_id

    response = await client.get("/executions", params=query)
    executions = (response.get("data") if isinstance(response, dict) else None) or []

    return compute_execution_stats(executions)


# =============================================================================
# Health Check Tool
# =============================================================================

class N8nHealthCheckInput(ToolInput):
    """Input schema for n8n_health_check."""
    pass  # No parameters needed


@tool(
    name="n8n_health_check",
    description="Check n8n server health status",
    input_schema=N8nHealthCheckInput,
    tags=["n8n", "health"],
)
async def n8n_health_check(params: N8nHealthCheckInput, client: N8nClient) -> Dict[str, Any]:
    """Check that the n8n API answers a minimal workflow listing.

    Never raises: failures are reported as an "unhealthy" status.
    """
    logger.info("Checking n8n health")

    try:
        await client.get("/workflows", params={"limit": 1})
        return {"status": "healthy", "url": client.base_url}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "url": client.base_url,
            "error": str(e),
        }
