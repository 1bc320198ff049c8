"""Transports serving the MCP server: stdio and streamable HTTP."""
