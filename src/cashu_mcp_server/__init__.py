"""MCP server exposing Cashu mint operations as tools."""

__version__ = "0.1.0"
