"""Tests for execution statistics and the health check."""

import pytest

from n8n_mcp.mcp_tools.n8n.client import N8nAPIError, N8nConnectionError
from n8n_mcp.mcp_tools.n8n.monitoring import (
    STATS_SAMPLE_SIZE,
    N8nGetExecutionStatsInput,
    N8nHealthCheckInput,
    compute_execution_stats,
    n8n_get_execution_stats,
    n8n_health_check,
)


class TestExecutionStats:
    """Tests for n8n_get_execution_stats."""

    def test_counts_by_status(self):
        """Test each known status is tallied and unknown ones only count in total."""
        executions = (
            [{"status": "success"}] * 3
            + [{"status": "error"}] * 2
            + [{"status": "waiting"}, {"status": "running"}, {"status": "canceled"}, {}]
        )

        stats = compute_execution_stats(executions)

        assert stats == {"total": 9, "success": 3, "error": 2, "waiting": 1, "running": 1}
        assert stats["success"] + stats["error"] + stats["waiting"] + stats["running"] <= stats["total"]

    def test_empty(self):
        """Test no executions gives all zeros."""
        assert compute_execution_stats([]) == {
            "total": 0, "success": 0, "error": 0, "waiting": 0, "running": 0,
        }

    @pytest.mark.asyncio
    async def test_samples_latest_hundred(self, mock_client):
        """Test the tool fetches at most 100 executions and totals what it got."""
        mock_client.get.return_value = {"data": [{"status": "success"}] * STATS_SAMPLE_SIZE}

        stats = await n8n_get_execution_stats(N8nGetExecutionStatsInput(), mock_client)

        assert stats["total"] == 100
        assert stats["success"] == 100
        mock_client.get.assert_awaited_once_with("/executions", params={"limit": 100})

    @pytest.mark.asyncio
    async def test_workflow_filter(self, mock_client):
        """Test workflow_id is forwarded as workflowId; period is not sent."""
        mock_client.get.return_value = {"data": []}

        params = N8nGetExecutionStatsInput(workflow_id="w1", period="week")
        await n8n_get_execution_stats(params, mock_client)

        mock_client.get.assert_awaited_once_with(
            "/executions",
            params={"limit": 100, "workflowId": "w1"},
        )


    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[{"status": "success"}], "upstream text", None])
    async def test_unexpected_body_shape(self, mock_client, body):
        """Test a body without a data list counts as no executions."""
        mock_client.get.return_value = body

        stats = await n8n_get_execution_stats(N8nGetExecutionStatsInput(), mock_client)

        assert stats == {"total": 0, "success": 0, "error": 0, "waiting": 0, "running": 0}


class TestHealthCheck:
    """Tests for n8n_health_check."""

    @pytest.mark.asyncio
    async def test_healthy(self, mock_client):
        """Test a successful listing reports healthy."""
        result = await n8n_health_check(N8nHealthCheckInput(), mock_client)

        assert result == {"status": "healthy", "url": "http://n8n.test:5678"}
        mock_client.get.assert_awaited_once_with("/workflows", params={"limit": 1})

    @pytest.mark.asyncio
    async def test_unhealthy_on_api_error(self, mock_client):
        """Test an upstream error is embedded instead of raised."""
        mock_client.get.side_effect = N8nAPIError(401, {"message": "unauthorized"})

        result = await n8n_health_check(N8nHealthCheckInput(), mock_client)

        assert result["status"] == "unhealthy"
        assert result["url"] == "http://n8n.test:5678"
        assert result["error"] == 'n8n API error: 401 - {"message": "unauthorized"}'

    @pytest.mark.asyncio
    async def test_unhealthy_on_connection_error(self, mock_client):
        """Test transport failures are reported, not raised."""
        mock_client.get.side_effect = N8nConnectionError("Connection refused")

        result = await n8n_health_check(N8nHealthCheckInput(), mock_client)

        assert result == {
            "status": "unhealthy",
            "url": "http://n8n.test:5678",
            "error": "Connection refused",
        }
