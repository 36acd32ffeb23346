"""
MCP server + client lifecycle.

Handles tools/list and tools/call over stdio.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .client.gh_client import create_client, get_client, set_client
from .handlers import dispatch_tool
from .tools import ALL_TOOLS

if TYPE_CHECKING:
  from .config import Config

log = logging.getLogger("github_actions_mcp.server")

SERVER_NAME = "github-actions-mcp-server"


class ToolCallError(Exception):
  """Raised so the MCP layer marks the tool result as an error."""


def create_mcp_server() -> Server:
  """Create and configure the MCP server with all tool handlers."""
  server = Server(SERVER_NAME, version=__version__)

  @server.list_tools()
  async def list_tools() -> list[Tool]:
    return ALL_TOOLS

  @server.call_tool()
  async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    args = arguments or {}
    result = await dispatch_tool(name, args)
    if result.is_error:
      raise ToolCallError(result.content)
    return [TextContent(type="text", text=result.content)]

  return server


async def start_client(config: Config) -> None:
  """Create the GitHub client from the resolved configuration."""
  client = create_client(config)
  await client.initialize()


async def stop_client() -> None:
  try:
    client = get_client()
  except RuntimeError:
    return
  try:
    await client.close()
  except Exception:
    log.exception("Error closing GitHub client")
  set_client(None)
  log.info("GitHub client closed")


async def run_server(config: Config) -> None:
  """Run the MCP server on stdio until the client disconnects."""
  await start_client(config)
  server = create_mcp_server()
  try:
    async with stdio_server() as (read_stream, write_stream):
      log.info("Connected via stdio transport")
      await server.run(read_stream, write_stream, server.create_initialization_options())
  finally:
    await stop_client()
