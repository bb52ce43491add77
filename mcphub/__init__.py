"""MCP Hub: catalogue, blog, documentation and contact API for MCP tools."""

__version__ = "1.0.0"
