"""n8n MCP Server.

Exposes n8n workflow automation (workflows, executions, credentials,
tags, templates) as Model Context Protocol tools.
"""

__version__ = "1.0.0"
