"""Tests for tool registry functionality."""

from typing import Dict, List, Literal, Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from n8n_mcp import mcp_tools  # noqa: F401
from n8n_mcp.tool_registry import (
    ToolNotFoundError,
    ToolRegistry,
    get_registry,
    render_result,
)


class SampleInput(BaseModel):
    """Sample input schema for testing."""
    name: str = Field(description="A name")
    count: Optional[int] = Field(default=None, description="A count")
    labels: Optional[List[str]] = Field(default=None, description="Labels")
    mode: Optional[Literal["fast", "slow"]] = Field(default=None, description="Mode")
    extra: Optional[Dict[str, object]] = Field(default=None, description="Free-form")


async def sample_handler(params: SampleInput, client) -> Dict[str, str]:
    return {"result": f"Hello {params.name}", "client": client}


class TestToolRegistry:
    """Tests for ToolRegistry class."""

    def test_register_tool(self):
        """Test registering a new tool."""
        registry = ToolRegistry()
        registry.register(
            name="test_tool",
            description="A test tool",
            input_schema=SampleInput,
            handler=sample_handler,
            tags=["test"]
        )

        tool = registry.get("test_tool")
        assert tool is not None
        assert tool.name == "test_tool"
        assert tool.description == "A test tool"
        assert tool.tags == ["test"]

    def test_register_duplicate_raises(self):
        """Test that registering duplicate tool raises error."""
        registry = ToolRegistry()
        registry.register("test_tool", "First", SampleInput, sample_handler)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("test_tool", "Duplicate", SampleInput, sample_handler)

    def test_get_nonexistent_returns_none(self):
        """Test getting a nonexistent tool returns None."""
        assert ToolRegistry().get("nonexistent_tool") is None

    def test_list_tools_keeps_registration_order(self):
        """Test tools are listed in the order they were registered."""
        registry = ToolRegistry()
        for name in ("zeta", "alpha", "mid"):
            registry.register(name, name, SampleInput, sample_handler)

        assert [t.name for t in registry.list_tools()] == ["zeta", "alpha", "mid"]

    def test_manifest_schema_shape(self):
        """Test the input model renders as a plain JSON schema."""
        registry = ToolRegistry()
        registry.register("test_tool", "A test tool", SampleInput, sample_handler)

        manifest = registry.get_manifest()[0]
        schema = manifest["inputSchema"]

        assert manifest["name"] == "test_tool"
        assert manifest["description"] == "A test tool"
        assert manifest["_meta"] == {"tags": []}
        assert schema["type"] == "object"
        assert schema["required"] == ["name"]
        assert schema["properties"]["name"] == {"description": "A name", "type": "string"}
        assert schema["properties"]["count"] == {"description": "A count", "type": "integer"}
        assert schema["properties"]["labels"]["type"] == "array"
        assert schema["properties"]["labels"]["items"] == {"type": "string"}
        assert schema["properties"]["mode"]["enum"] == ["fast", "slow"]
        assert schema["properties"]["extra"]["type"] == "object"
        assert "title" not in str(schema)
        assert "anyOf" not in str(schema)


class TestToolExecution:
    """Tests for tool execution."""

    @pytest.mark.asyncio
    async def test_execute_validates_and_passes_client(self):
        """Test arguments are validated and the client is handed through."""
        registry = ToolRegistry()
        registry.register("test_tool", "A test tool", SampleInput, sample_handler)

        result = await registry.execute("test_tool", {"name": "World"}, "the-client")

        assert result == {"result": "Hello World", "client": "the-client"}

    @pytest.mark.asyncio
    async def test_execute_sync_handler(self):
        """Test plain functions work as handlers too."""
        registry = ToolRegistry()
        registry.register("sync_tool", "Sync", SampleInput, lambda params, client: params.name)

        assert await registry.execute("sync_tool", {"name": "x"}, None) == "x"

    @pytest.mark.asyncio
    async def test_execute_unknown_tool(self):
        """Test unknown tools raise ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError, match="Unknown tool: nope"):
            await ToolRegistry().execute("nope", {}, None)

    @pytest.mark.asyncio
    async def test_execute_missing_required(self):
        """Test missing required arguments raise ValidationError."""
        registry = ToolRegistry()
        registry.register("test_tool", "A test tool", SampleInput, sample_handler)

        with pytest.raises(ValidationError):
            await registry.execute("test_tool", {}, None)


class TestRenderResult:
    """Tests for result rendering."""

    def test_strings_pass_through(self):
        """Test status messages are returned verbatim."""
        assert render_result("Tag 1 deleted") == "Tag 1 deleted"

    def test_json_pretty_printed(self):
        """Test data is rendered as two-space indented JSON."""
        assert render_result({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'

    def test_none_renders_as_null(self):
        """Test an empty upstream body renders as JSON null."""
        assert render_result(None) == "null"


class TestN8nCatalog:
    """Checks over the registered n8n tool catalog."""

    EXPECTED_TOOLS = [
        "n8n_list_workflows",
        "n8n_get_workflow",
        "n8n_create_workflow",
        "n8n_update_workflow",
        "n8n_delete_workflow",
        "n8n_activate_workflow",
        "n8n_deactivate_workflow",
        "n8n_execute_workflow",
        "n8n_list_executions",
        "n8n_get_execution",
        "n8n_retry_execution",
        "n8n_stop_execution",
        "n8n_delete_execution",
        "n8n_list_credentials",
        "n8n_get_credential",
        "n8n_create_credential",
        "n8n_update_credential",
        "n8n_delete_credential",
        "n8n_list_tags",
        "n8n_create_tag",
        "n8n_update_tag",
        "n8n_delete_tag",
        "n8n_add_tags_to_workflow",
        "n8n_list_node_types",
        "n8n_list_webhooks",
        "n8n_get_execution_stats",
        "n8n_health_check",
        "n8n_get_workflow_template",
    ]

    REQUIRED_FIELDS = {
        "n8n_get_workflow": ["workflow_id"],
        "n8n_create_workflow": ["name"],
        "n8n_update_workflow": ["workflow_id"],
        "n8n_delete_workflow": ["workflow_id"],
        "n8n_activate_workflow": ["workflow_id"],
        "n8n_deactivate_workflow": ["workflow_id"],
        "n8n_execute_workflow": ["workflow_id"],
        "n8n_get_execution": ["execution_id"],
        "n8n_retry_execution": ["execution_id"],
        "n8n_stop_execution": ["execution_id"],
        "n8n_delete_execution": ["execution_id"],
        "n8n_get_credential": ["credential_id"],
        "n8n_create_credential": ["name", "type", "data"],
        "n8n_update_credential": ["credential_id"],
        "n8n_delete_credential": ["credential_id"],
        "n8n_create_tag": ["name"],
        "n8n_update_tag": ["tag_id", "name"],
        "n8n_delete_tag": ["tag_id"],
        "n8n_add_tags_to_workflow": ["workflow_id", "tag_ids"],
        "n8n_get_workflow_template": ["template_type"],
    }

    def test_catalog_order(self):
        """Test all tools are registered in advertised order."""
        assert [t.name for t in get_registry().list_tools()] == self.EXPECTED_TOOLS

    @pytest.mark.parametrize("name", EXPECTED_TOOLS)
    def test_required_fields(self, name):
        """Test each tool advertises exactly its required fields."""
        schema = get_registry().get(name).input_json_schema()

        assert schema["required"] == self.REQUIRED_FIELDS.get(name, [])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", sorted(REQUIRED_FIELDS))
    async def test_omitting_required_fields_is_rejected(self, name, mock_client):
        """Test a call without required fields never reaches n8n."""
        with pytest.raises(ValidationError):
            await get_registry().execute(name, {}, mock_client)

        mock_client.get.assert_not_awaited()
        mock_client.post.assert_not_awaited()
        mock_client.patch.assert_not_awaited()
        mock_client.delete.assert_not_awaited()
