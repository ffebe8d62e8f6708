#!/usr/bin/env python3
"""
X MCP Server - FastMCP server exposing X (Twitter) API actions as tools.

Credential modes (X_MCP_CREDENTIAL_MODE):
- per_call (default): each tool call carries its own OAuth 2.0 accessToken;
  a client is built for that call and discarded afterwards
- static: OAuth 1.0a app credentials are read from the environment at first
  use and back one shared client for the life of the process

Transports (MCP_TRANSPORT): stdio (default) or http.
"""

import os
import sys
from typing import Any, Dict

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from .catalog import CATALOG
from .client_factory import PER_CALL_MODE, build_client_factory
from .dispatcher import Dispatcher
from .models.operation import OperationSpec, ToolCallRequest

SERVER_NAME = "X MCP Server"


class CatalogTool(Tool):
    """MCP tool backed by one catalogue operation."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        envelope = await self.dispatcher.handle(ToolCallRequest(self.name, arguments or {}))
        return ToolResult(content=[
            TextContent(type="text", text=block["text"]) for block in envelope["content"]
        ])


def make_tool(spec: OperationSpec, dispatcher: Dispatcher) -> CatalogTool:
    """Build the MCP tool for an operation, including credential params."""
    return CatalogTool(
        name=spec.name,
        description=spec.description,
        parameters=spec.json_schema(dispatcher.client_factory.credential_params),
        annotations=ToolAnnotations(
            readOnlyHint=spec.read_only,  # Only reads data from X
            openWorldHint=True,           # Accesses external X API
        ),
        dispatcher=dispatcher,
    )


def create_server(client_factory, catalog=CATALOG, name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server with every catalogue operation registered."""
    mcp = FastMCP(name=name)
    dispatcher = Dispatcher(catalog, client_factory)
    for spec in catalog.values():
        mcp.add_tool(make_tool(spec, dispatcher))
    print(f"[INFO] Registered {len(catalog)} X tools ({client_factory.mode} credentials)",
          file=sys.stderr)
    return mcp


def main():
    mode = os.getenv("X_MCP_CREDENTIAL_MODE", PER_CALL_MODE)
    try:
        client_factory = build_client_factory(mode)
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    mcp = create_server(client_factory)
    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()

    # stdout is the MCP stream under stdio; banner goes to stderr
    print("\n" + "=" * 60, file=sys.stderr)
    print("X MCP Server", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"Credentials:   {client_factory.mode}", file=sys.stderr)
    print(f"Transport:     {transport}", file=sys.stderr)
    print("Tools:", file=sys.stderr)
    for tool_name in CATALOG:
        print(f"  • {tool_name}", file=sys.stderr)
    print("=" * 60 + "\n", file=sys.stderr)

    if transport == "http":
        host = os.getenv("MCP_HOST", "127.0.0.1")
        port = int(os.getenv("MCP_PORT", "8000"))
        print(f"Starting server on http://{host}:{port}", file=sys.stderr)
        mcp.run(transport="http", host=host, port=port)
    elif transport == "stdio":
        mcp.run(transport="stdio")
    else:
        print(f"[ERROR] Invalid MCP_TRANSPORT: '{transport}'. Valid values: stdio, http",
              file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
