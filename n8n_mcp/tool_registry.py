"""Tool registration and discovery system for the n8n MCP Server.

Provides a central registry for all MCP tools with:
- Input validation using Pydantic
- JSON-schema rendering for tool discovery
- Execution routing
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict


class ToolInput(BaseModel):
    """Base class for tool input models.

    Only required fields are enforced locally. Numbers given for string
    fields (IDs, names) are passed on as strings and n8n decides whether
    they exist.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ToolNotFoundError(ValueError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


@dataclass
class ToolDefinition:
    """Definition of an MCP tool.

    Attributes:
        name: Unique tool identifier (e.g., "n8n_list_workflows")
        description: Human-readable description
        input_schema: Pydantic model for input validation
        handler: Async function called with (params, client)
        tags: Optional tags for categorization
    """
    name: str
    description: str
    input_schema: Type[BaseModel]
    handler: Callable
    tags: List[str] = field(default_factory=list)

    def to_manifest_dict(self) -> Dict[str, Any]:
        """Convert to the MCP tool descriptor shape.

        Tags travel in ``_meta`` so clients can group tools.

        Returns:
            Dictionary with name, description, inputSchema and _meta
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_json_schema(),
            "_meta": {"tags": list(self.tags)},
        }

    def input_json_schema(self) -> Dict[str, Any]:
        """Render the input model as a plain JSON-schema object.

        Pydantic titles are dropped and Optional[X] collapses to X, so the
        advertised schema only lists types, descriptions, enums and
        required fields.
        """
        json_schema = self.input_schema.model_json_schema()
        properties = {
            name: self._clean_property(prop)
            for name, prop in json_schema.get("properties", {}).items()
        }
        return {
            "type": "object",
            "properties": properties,
            "required": list(json_schema.get("required", [])),
        }

    @classmethod
    def _clean_property(cls, prop: Dict[str, Any]) -> Dict[str, Any]:
        prop = {k: v for k, v in prop.items() if k != "title"}

        if "anyOf" in prop:
            variants = [v for v in prop.pop("anyOf") if v.get("type") != "null"]
            if len(variants) == 1:
                prop = {**variants[0], **prop}
            else:
                prop["anyOf"] = variants

        if "default" in prop and prop["default"] is None:
            del prop["default"]

        if isinstance(prop.get("items"), dict):
            prop["items"] = cls._clean_property(prop["items"])

        return prop


class ToolRegistry:
    """Central registry for MCP tools.

    Manages tool registration, discovery, and execution. Tools are kept
    in registration order, which is the order they are advertised in.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        input_schema: Type[BaseModel],
        handler: Callable,
        tags: Optional[List[str]] = None
    ) -> None:
        """Register a new tool.

        Args:
            name: Unique tool identifier
            description: Human-readable description
            input_schema: Pydantic model for input validation
            handler: Async function that executes the tool
            tags: Optional tags for categorization

        Raises:
            ValueError: If tool with same name already exists
        """
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")

        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler,
            tags=tags or []
        )

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool by name.

        Args:
            name: Tool identifier

        Returns:
            ToolDefinition if found, None otherwise
        """
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDefinition]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())

    def get_manifest(self) -> List[Dict[str, Any]]:
        """Get the tool descriptors advertised to MCP clients."""
        return [tool.to_manifest_dict() for tool in self._tools.values()]

    async def execute(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
        client: Any,
    ) -> Any:
        """Execute a tool with the given arguments.

        Args:
            name: Tool identifier
            arguments: Raw tool arguments from the caller
            client: N8nClient passed through to the handler

        Returns:
            Handler result (a status string or JSON-serializable data)

        Raises:
            ToolNotFoundError: If tool not found
            ValidationError: If arguments are invalid
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError(name)

        params = tool.input_schema.model_validate(arguments or {})

        if asyncio.iscoroutinefunction(tool.handler):
            return await tool.handler(params, client)
        return tool.handler(params, client)


def render_result(result: Any) -> str:
    """Render a handler result as the text returned to the caller.

    Strings are status messages and pass through unchanged; everything
    else is pretty-printed JSON.
    """
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        result = result.model_dump()
    return json.dumps(result, indent=2, default=str)


# Global registry instance
_registry: Optional[ToolRegistry] = None


def get_registry() -> ToolRegistry:
    """Get the global tool registry.

    Creates the instance on first call.
    """
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
    return _registry


def tool(
    name: str,
    description: str,
    input_schema: Type[BaseModel],
    tags: Optional[List[str]] = None
) -> Callable:
    """Decorator to register a function as an MCP tool.

    Args:
        name: Unique tool identifier
        description: Human-readable description
        input_schema: Pydantic model for input validation
        tags: Optional tags for categorization

    Returns:
        Decorator function

    Example:
        @tool(
            name="n8n_get_workflow",
            description="Get detailed information about a specific workflow",
            input_schema=N8nGetWorkflowInput,
            tags=["n8n", "workflows"]
        )
        async def n8n_get_workflow(params, client):
            ...
    """
    def decorator(func: Callable) -> Callable:
        get_registry().register(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=func,
            tags=tags
        )
        return func
    return decorator
