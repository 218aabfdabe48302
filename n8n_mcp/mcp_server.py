"""MCP Protocol Server for n8n.

Exposes the n8n tool catalog to MCP clients (Claude Desktop, Cursor, ...)
using the official MCP Python SDK with stdio transport.

IMPORTANT: All logging MUST go to stderr, not stdout!
The MCP protocol uses stdout for JSON-RPC communication.
"""

import asyncio
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from . import __version__
from .config import get_settings
from .logging_config import ToolInvocationLogger, get_logger, setup_logging
from .mcp_tools.n8n.client import N8nClient, close_client, get_client
from .tool_registry import get_registry, render_result

# Import tools to register them
from . import mcp_tools  # noqa: F401

logger = get_logger(__name__)

# Create the MCP server instance
mcp = Server("n8n-mcp", version=__version__)


# -----------------------------------------------------------------------------
# Tool Definitions
# -----------------------------------------------------------------------------

def get_tool_definitions() -> list[Tool]:
    """Return the list of available MCP tools with their schemas."""
    return [Tool.model_validate(manifest) for manifest in get_registry().get_manifest()]


def _log_context(arguments: dict[str, Any]) -> dict[str, Any]:
    """Pick the identifying arguments worth attaching to log records."""
    return {
        key: value for key, value in arguments.items()
        if key.endswith("_id") or key in ("template_type", "search", "status")
    }


async def execute_tool(
    name: str,
    arguments: Optional[dict[str, Any]],
    client: Optional[N8nClient] = None,
) -> CallToolResult:
    """Execute a tool and package the outcome as a single text block.

    Any exception raised while validating or running the tool becomes an
    error-flagged result; nothing propagates to the transport.
    """
    arguments = arguments or {}
    invocation = ToolInvocationLogger(logger).start(name, **_log_context(arguments))

    try:
        result = await get_registry().execute(name, arguments, client or get_client())
        text = render_result(result)
    except Exception as e:
        invocation.failure(str(e), error_type=type(e).__name__)
        logger.debug(f"Tool execution failed: {name}", exc_info=True)
        return CallToolResult(
            content=[TextContent(type="text", text=f"Error: {e}")],
            isError=True,
        )

    invocation.success()
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=False,
    )


# -----------------------------------------------------------------------------
# MCP Protocol Handlers
# -----------------------------------------------------------------------------

@mcp.list_tools()
async def list_tools() -> list[Tool]:
    """Return the list of available tools."""
    return get_tool_definitions()


# Arguments are validated by each tool's pydantic model, so unknown
# template types still reach the handler and get the catalog listing.
@mcp.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
    """Execute a tool and return the result."""
    return await execute_tool(name, arguments)


# -----------------------------------------------------------------------------
# Main Entry Point
# -----------------------------------------------------------------------------

async def main() -> None:
    """Run the MCP server using stdio transport."""
    settings = get_settings()
    setup_logging(settings.mcp_log_level)

    logger.info(
        "Starting n8n MCP Server (stdio transport)",
        extra={
            "tool_count": len(get_registry().list_tools()),
            "config": settings.get_safe_dict(),
        }
    )

    try:
        async with stdio_server() as (read_stream, write_stream):
            await mcp.run(
                read_stream,
                write_stream,
                mcp.create_initialization_options()
            )
    finally:
        await close_client()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
