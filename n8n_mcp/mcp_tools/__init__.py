"""MCP tool implementations.

Importing this package registers every tool with the global registry.
"""

from . import n8n  # noqa: F401
