"""
formtree MCP Server Entry Point.

Run the MCP server with either stdio or SSE transport.

Usage:
    # stdio mode (desktop clients)
    python run_mcp_server.py --transport stdio

    # SSE mode (for Docker/remote)
    python run_mcp_server.py --transport sse --port 8080

    # Use environment variables
    MCP_TRANSPORT=sse MCP_PORT=8080 python run_mcp_server.py
"""

import argparse
import asyncio
import sys

from formtree.config import get_config
from formtree.mcp_server import run_mcp_server


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="formtree MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Local client (stdio)
  python run_mcp_server.py --transport stdio

  # Docker/Remote (SSE)
  python run_mcp_server.py --transport sse --port 8080

Environment Variables:
  MCP_TRANSPORT                  Transport type: stdio or sse (default: stdio)
  MCP_HOST                       Host for SSE transport (default: 0.0.0.0)
  MCP_PORT                       Port for SSE transport (default: 8080)
  FORMTREE_LOG_LEVEL             Logging level (default: INFO)
  FORMTREE_INCLUDE_SUGGESTIONS   Attach fix suggestions to issues (default: true)
        """,
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=config.mcp_transport,
        help=f"Transport type (default: {config.mcp_transport})",
    )

    parser.add_argument(
        "--host",
        default=config.mcp_host,
        help=f"Host for SSE transport (default: {config.mcp_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})",
    )

    args = parser.parse_args()

    # stdout carries the protocol in stdio mode
    out = sys.stderr if args.transport == "stdio" else sys.stdout
    print("=" * 60, file=out)
    print("formtree MCP Server", file=out)
    print("=" * 60, file=out)
    print(f"Transport: {args.transport}", file=out)
    if args.transport == "sse":
        print(f"Host: {args.host}", file=out)
        print(f"Port: {args.port}", file=out)
    print("=" * 60, file=out)

    try:
        asyncio.run(
            run_mcp_server(
                transport=args.transport,
                host=args.host,
                port=args.port,
            )
        )
    except KeyboardInterrupt:
        print("\nServer stopped.", file=out)
    except Exception as e:
        print(f"Error: {e}", file=out)
        sys.exit(1)


if __name__ == "__main__":
    main()
