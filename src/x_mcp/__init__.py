"""
X MCP Server - X (Twitter) API v2 actions exposed as MCP tools.
"""

__version__ = "1.0.0"
