"""
Actions / Workflow tools (11 tools).
"""

from __future__ import annotations

from typing import Any

from mcp.types import Tool

from ..api.actions_api import JOB_FILTERS, RUN_STATUSES

_OWNER = {"type": "string", "description": "Repository owner (username or organization)"}
_REPO = {"type": "string", "description": "Repository name"}
_WORKFLOW_ID = {
  "type": ["string", "number"],
  "description": "The ID of the workflow or its file name (e.g. 'ci.yml')",
}
_WORKFLOW_FILE = {"type": "string", "description": "The workflow file name, e.g. runner.yaml"}
_RUN_ID = {"type": "number", "description": "The ID of the workflow run"}
_PAGE = {"type": "number", "description": "Page number for pagination", "minimum": 1}
_PER_PAGE = {
  "type": "number",
  "description": "Results per page (max 100)",
  "minimum": 1,
  "maximum": 100,
}


def _schema(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
  return {"type": "object", "properties": properties, "required": required}


actions_tools: list[Tool] = [
  Tool(
    name="list_workflows",
    description="List workflows in a GitHub repository",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "page": _PAGE, "perPage": _PER_PAGE},
      ["owner", "repo"],
    ),
  ),
  Tool(
    name="get_workflow",
    description="Get details of a specific workflow",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "workflowId": _WORKFLOW_ID},
      ["owner", "repo", "workflowId"],
    ),
  ),
  Tool(
    name="get_workflow_usage",
    description="Get usage statistics of a workflow",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "workflowId": _WORKFLOW_ID},
      ["owner", "repo", "workflowId"],
    ),
  ),
  Tool(
    name="list_workflow_runs",
    description="List all workflow runs for a repository or a specific workflow",
    inputSchema=_schema(
      {
        "owner": _OWNER,
        "repo": _REPO,
        "workflowId": {**_WORKFLOW_ID, "description": "Only list runs of this workflow"},
        "actor": {
          "type": "string",
          "description": "Returns someone's workflow runs. Use the login for the user",
        },
        "branch": {
          "type": "string",
          "description": "Returns workflow runs associated with a branch",
        },
        "event": {"type": "string", "description": "Returns workflow runs triggered by the event"},
        "status": {
          "type": "string",
          "enum": list(RUN_STATUSES),
          "description": "Returns workflow runs with the check run status",
        },
        "created": {
          "type": "string",
          "description": "Returns workflow runs created within date range (YYYY-MM-DD)",
        },
        "excludePullRequests": {
          "type": "boolean",
          "description": "If true, pull requests are omitted from the response",
        },
        "checkSuiteId": {
          "type": "number",
          "description": "Returns workflow runs with the check_suite_id",
        },
        "page": _PAGE,
        "perPage": _PER_PAGE,
      },
      ["owner", "repo"],
    ),
  ),
  Tool(
    name="get_workflow_run",
    description="Get details of a specific workflow run",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "runId": _RUN_ID},
      ["owner", "repo", "runId"],
    ),
  ),
  Tool(
    name="get_workflow_run_jobs",
    description="Get jobs for a specific workflow run",
    inputSchema=_schema(
      {
        "owner": _OWNER,
        "repo": _REPO,
        "runId": _RUN_ID,
        "filter": {
          "type": "string",
          "enum": list(JOB_FILTERS),
          "description": "Filter jobs by their completed_at date",
        },
        "page": _PAGE,
        "perPage": _PER_PAGE,
      },
      ["owner", "repo", "runId"],
    ),
  ),
  Tool(
    name="trigger_workflow",
    description="Trigger a workflow run",
    inputSchema=_schema(
      {
        "owner": _OWNER,
        "repo": _REPO,
        "workflowId": _WORKFLOW_ID,
        "ref": {
          "type": "string",
          "description": "The reference of the workflow run (branch, tag, or SHA)",
        },
        "inputs": {
          "type": "object",
          "description": "Input parameters for the workflow",
          "additionalProperties": {"type": "string"},
        },
      },
      ["owner", "repo", "workflowId", "ref"],
    ),
  ),
  Tool(
    name="cancel_workflow_run",
    description="Cancel a workflow run",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "runId": _RUN_ID},
      ["owner", "repo", "runId"],
    ),
  ),
  Tool(
    name="rerun_workflow",
    description="Re-run a workflow run",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "runId": _RUN_ID},
      ["owner", "repo", "runId"],
    ),
  ),
  Tool(
    name="get_workflow_yaml",
    description="Get the YAML source of a workflow file in .github/workflows",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "workflowId": _WORKFLOW_FILE},
      ["owner", "repo", "workflowId"],
    ),
  ),
  Tool(
    name="get_workflow_dispatch_inputs",
    description="List the workflow_dispatch inputs a workflow file declares",
    inputSchema=_schema(
      {"owner": _OWNER, "repo": _REPO, "workflowId": _WORKFLOW_FILE},
      ["owner", "repo", "workflowId"],
    ),
  ),
]
