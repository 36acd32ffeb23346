"""Handler dispatch table: maps tool names to handler functions."""

from __future__ import annotations

import logging
from typing import Any

from ..helpers import ToolResult
from .actions import (
  cancel_workflow_run,
  get_workflow,
  get_workflow_dispatch_inputs,
  get_workflow_run,
  get_workflow_run_jobs,
  get_workflow_usage,
  get_workflow_yaml,
  list_workflow_runs,
  list_workflows,
  rerun_workflow,
  trigger_workflow,
)

log = logging.getLogger("github_actions_mcp.handlers")

DISPATCH: dict[str, Any] = {
  # Workflows
  "list_workflows": list_workflows,
  "get_workflow": get_workflow,
  "get_workflow_usage": get_workflow_usage,
  # Runs
  "list_workflow_runs": list_workflow_runs,
  "get_workflow_run": get_workflow_run,
  "get_workflow_run_jobs": get_workflow_run_jobs,
  "trigger_workflow": trigger_workflow,
  "cancel_workflow_run": cancel_workflow_run,
  "rerun_workflow": rerun_workflow,
  # Workflow files
  "get_workflow_yaml": get_workflow_yaml,
  "get_workflow_dispatch_inputs": get_workflow_dispatch_inputs,
}


async def dispatch_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
  """Look up and execute a tool handler by name."""
  handler = DISPATCH.get(name)
  if handler is None:
    log.error("Unknown tool: %s", name)
    return ToolResult(content=f"Unknown tool: {name}", is_error=True)
  log.info("Received %s request", name)
  result: ToolResult = await handler(arguments)
  return result
