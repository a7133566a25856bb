"""MCP server exposing GitHub Projects (v2) tools over the GraphQL API."""

__version__ = "0.1.0"
