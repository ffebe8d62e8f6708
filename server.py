#!/usr/bin/env python3
"""
X MCP Server entry point.

Runs the FastMCP server from the x_mcp package. Configure with:
- X_MCP_CREDENTIAL_MODE: per_call (default) or static
- TWITTER_API_KEY, TWITTER_API_KEY_SECRET, TWITTER_ACCESS_TOKEN,
  TWITTER_ACCESS_TOKEN_SECRET: static-mode secrets
- MCP_TRANSPORT: stdio (default) or http, with MCP_HOST / MCP_PORT
"""

from x_mcp.server import main

if __name__ == "__main__":
    main()
