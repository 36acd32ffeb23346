"""GitHub Actions tools for MCP clients."""

__version__ = "0.2.0"
