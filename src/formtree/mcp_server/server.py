"""
MCP Server implementation for formtree.

Provides both stdio and SSE transport support for the Model Context Protocol.
"""

import json
import logging
from typing import Any, Literal

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from formtree.config import get_config
from formtree.mcp_server.session_store import form_sessions
from formtree.mcp_server.tools import get_mcp_tools, handle_tool_call

# Configure logging
logging.basicConfig(level=get_config().log_level)
logger = logging.getLogger("formtree-mcp")


def run_tool(name: str, arguments: dict[str, Any] | None) -> str:
    """Run a tool call and render the result as JSON text; errors become payloads."""
    config = get_config()
    try:
        result = handle_tool_call(name, arguments or {})
    except Exception as e:
        logger.error(f"Error in {name}: {type(e).__name__}: {e}")
        result = {"error": str(e)}
    return json.dumps(result, indent=config.indent_json_output)


def create_mcp_server() -> Server:
    """
    Create and configure the MCP server instance.

    Returns:
        Configured MCP Server with formtree tools registered.
    """
    server = Server("formtree-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        tools_def = get_mcp_tools()
        return [
            Tool(
                name=t["name"],
                description=t["description"],
                inputSchema=t["inputSchema"],
            )
            for t in tools_def
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        logger.info(f"Tool call: {name}")
        return [TextContent(type="text", text=run_tool(name, arguments))]

    return server


async def run_stdio_server(server: Server) -> None:
    """
    Run MCP server with stdio transport.

    Used for desktop clients and local subprocess communication.
    """
    logger.info("Starting MCP server with stdio transport...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def create_sse_app(server: Server) -> Starlette:
    """
    Create Starlette app for SSE transport.

    Used for remote/Docker deployment.
    """
    # SSE transport - messages endpoint is relative to SSE mount point
    sse_transport = SseServerTransport("/messages/")

    async def handle_sse(scope, receive, send):
        """Handle SSE connections - raw ASGI handler."""
        async with sse_transport.connect_sse(scope, receive, send) as streams:
            await server.run(
                streams[0],
                streams[1],
                server.create_initialization_options(),
            )

    async def handle_messages(scope, receive, send):
        """Handle message POST requests - raw ASGI handler."""
        await sse_transport.handle_post_message(scope, receive, send)

    async def health_check(request):
        """Health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": "formtree-mcp",
            "transport": "sse",
            "active_sessions": len(form_sessions),
        })

    return Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Mount("/sse/messages", app=handle_messages),
            Mount("/sse", app=handle_sse),
        ],
    )


async def run_sse_server(server: Server, host: str = "0.0.0.0", port: int = 8080) -> None:
    """
    Run MCP server with SSE transport.

    Args:
        server: MCP Server instance
        host: Host to bind to
        port: Port to listen on
    """
    import uvicorn

    logger.info(f"Starting MCP server with SSE transport on {host}:{port}...")

    app = create_sse_app(server)
    config = uvicorn.Config(app, host=host, port=port, log_level=get_config().log_level.lower())
    server_instance = uvicorn.Server(config)
    await server_instance.serve()


async def run_mcp_server(
    transport: Literal["stdio", "sse"] = "stdio",
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """
    Run MCP server with specified transport.

    Args:
        transport: Transport type - "stdio" or "sse"
        host: Host for SSE transport (default: 0.0.0.0)
        port: Port for SSE transport (default: 8080)
    """
    server = create_mcp_server()

    if transport == "stdio":
        await run_stdio_server(server)
    elif transport == "sse":
        await run_sse_server(server, host, port)
    else:
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")
