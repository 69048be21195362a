"""MCP tool server for driving an Aave-style lending pool."""

__version__ = "1.0.0"
