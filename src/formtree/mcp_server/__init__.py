"""
MCP Server module for formtree.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from formtree.mcp_server.server import create_mcp_server, create_sse_app, run_mcp_server
from formtree.mcp_server.tools import get_mcp_tools, handle_tool_call

__all__ = [
    "create_mcp_server",
    "create_sse_app",
    "run_mcp_server",
    "get_mcp_tools",
    "handle_tool_call",
]
