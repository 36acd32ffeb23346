"""
GitHub Actions operations API.

One coroutine per tool. Each validates owner/repo before building a URL,
issues the request through GhClient and returns JSON-serializable data.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Any

from ..errors import GitHubValidationError
from ..models import (
  ContentFile,
  Jobs,
  Workflow,
  WorkflowRun,
  WorkflowRuns,
  Workflows,
  WorkflowUsage,
  parse_response,
)
from ..validation import path_segment, validate_owner_name, validate_repository_name
from ..workflow_yaml import extract_dispatch_inputs

if TYPE_CHECKING:
  from ..client.gh_client import GhClient

log = logging.getLogger("github_actions_mcp.api.actions")

RUN_STATUSES = (
  "completed",
  "action_required",
  "cancelled",
  "failure",
  "neutral",
  "skipped",
  "stale",
  "success",
  "timed_out",
  "in_progress",
  "queued",
  "requested",
  "waiting",
  "pending",
)

JOB_FILTERS = ("latest", "all")


def _repo_path(owner: str, repo: str) -> str:
  owner = validate_owner_name(owner)
  repo = validate_repository_name(repo)
  return f"/repos/{owner}/{repo}"


def _dump(model: Any) -> dict[str, Any]:
  return model.model_dump(mode="json")


async def list_workflows(
  client: GhClient,
  owner: str,
  repo: str,
  page: int | None = None,
  per_page: int | None = None,
) -> dict[str, Any]:
  """List workflows in a repository."""
  base = _repo_path(owner, repo)
  data = await client.get(
    f"{base}/actions/workflows",
    resource=f"{owner}/{repo}",
    page=page,
    per_page=per_page,
  )
  return _dump(parse_response(Workflows, data))


async def get_workflow(
  client: GhClient, owner: str, repo: str, workflow_id: str | int
) -> dict[str, Any]:
  """Get a single workflow."""
  base = _repo_path(owner, repo)
  data = await client.get(
    f"{base}/actions/workflows/{path_segment(workflow_id)}",
    resource=f"workflow {workflow_id} in {owner}/{repo}",
  )
  return _dump(parse_response(Workflow, data))


async def get_workflow_usage(
  client: GhClient, owner: str, repo: str, workflow_id: str | int
) -> dict[str, Any]:
  """Get billable minutes for a workflow."""
  base = _repo_path(owner, repo)
  data = await client.get(
    f"{base}/actions/workflows/{path_segment(workflow_id)}/timing",
    resource=f"workflow {workflow_id} in {owner}/{repo}",
  )
  return _dump(parse_response(WorkflowUsage, data))


async def list_workflow_runs(
  client: GhClient,
  owner: str,
  repo: str,
  *,
  workflow_id: str | int | None = None,
  actor: str | None = None,
  branch: str | None = None,
  event: str | None = None,
  status: str | None = None,
  created: str | None = None,
  exclude_pull_requests: bool = False,
  check_suite_id: int | None = None,
  page: int | None = None,
  per_page: int | None = None,
) -> dict[str, Any]:
  """List runs for a repository, or for one workflow when workflow_id is set."""
  base = _repo_path(owner, repo)
  if status is not None and status not in RUN_STATUSES:
    raise GitHubValidationError(f"Invalid status: '{status}'", field="status", value=status)

  if workflow_id:
    path = f"{base}/actions/workflows/{path_segment(workflow_id)}/runs"
    resource = f"workflow {workflow_id} in {owner}/{repo}"
  else:
    path = f"{base}/actions/runs"
    resource = f"{owner}/{repo}"

  data = await client.get(
    path,
    resource=resource,
    actor=actor,
    branch=branch,
    event=event,
    status=status,
    created=created,
    exclude_pull_requests="true" if exclude_pull_requests else None,
    check_suite_id=check_suite_id,
    page=page,
    per_page=per_page,
  )
  return _dump(parse_response(WorkflowRuns, data))


async def get_workflow_run(client: GhClient, owner: str, repo: str, run_id: int) -> dict[str, Any]:
  """Get a single workflow run."""
  base = _repo_path(owner, repo)
  data = await client.get(
    f"{base}/actions/runs/{run_id}",
    resource=f"workflow run {run_id} in {owner}/{repo}",
  )
  return _dump(parse_response(WorkflowRun, data))


async def get_workflow_run_jobs(
  client: GhClient,
  owner: str,
  repo: str,
  run_id: int,
  filter: str | None = None,
  page: int | None = None,
  per_page: int | None = None,
) -> dict[str, Any]:
  """List jobs for a workflow run."""
  base = _repo_path(owner, repo)
  if filter is not None and filter not in JOB_FILTERS:
    raise GitHubValidationError(f"Invalid filter: '{filter}'", field="filter", value=filter)

  data = await client.get(
    f"{base}/actions/runs/{run_id}/jobs",
    resource=f"workflow run {run_id} in {owner}/{repo}",
    filter=filter,
    page=page,
    per_page=per_page,
  )
  return _dump(parse_response(Jobs, data))


async def trigger_workflow(
  client: GhClient,
  owner: str,
  repo: str,
  workflow_id: str | int,
  ref: str,
  inputs: dict[str, str] | None = None,
) -> dict[str, Any]:
  """Create a workflow_dispatch event."""
  base = _repo_path(owner, repo)
  body: dict[str, Any] = {"ref": ref}
  if inputs:
    body["inputs"] = inputs

  await client.post(
    f"{base}/actions/workflows/{path_segment(workflow_id)}/dispatches",
    body=body,
    resource=f"workflow {workflow_id} in {owner}/{repo}",
  )
  log.info("Dispatched workflow %s on %s/%s@%s", workflow_id, owner, repo, ref)
  return {"success": True, "message": f"Workflow {workflow_id} triggered on {ref}"}


async def cancel_workflow_run(
  client: GhClient, owner: str, repo: str, run_id: int
) -> dict[str, Any]:
  """Cancel an in-progress workflow run."""
  base = _repo_path(owner, repo)
  await client.post(
    f"{base}/actions/runs/{run_id}/cancel",
    resource=f"workflow run {run_id} in {owner}/{repo}",
  )
  return {"success": True, "message": f"Workflow run {run_id} cancelled"}


async def rerun_workflow_run(
  client: GhClient, owner: str, repo: str, run_id: int
) -> dict[str, Any]:
  """Re-run every job of a workflow run."""
  base = _repo_path(owner, repo)
  await client.post(
    f"{base}/actions/runs/{run_id}/rerun",
    resource=f"workflow run {run_id} in {owner}/{repo}",
  )
  return {"success": True, "message": f"Workflow run {run_id} restarted"}


def _decode_content(content: ContentFile) -> str:
  if content.type != "file":
    raise GitHubValidationError(
      f"{content.path} is a {content.type}, not a workflow file", field="type", value=content.type
    )
  if content.encoding not in (None, "base64") or content.content is None:
    raise GitHubValidationError(
      f"{content.path} is too large to fetch through the contents API",
      field="encoding",
      value=content.encoding,
    )
  try:
    return base64.b64decode(content.content).decode("utf-8", errors="replace")
  except (binascii.Error, ValueError) as e:
    raise GitHubValidationError(
      f"Could not decode {content.path}", field="content", value=str(e)
    ) from e


async def get_workflow_yaml(
  client: GhClient, owner: str, repo: str, workflow_id: str
) -> dict[str, str]:
  """Fetch the YAML source of .github/workflows/<workflow_id>."""
  base = _repo_path(owner, repo)
  file_path = f".github/workflows/{path_segment(workflow_id)}"
  data = await client.get(
    f"{base}/contents/{file_path}",
    resource=f"{file_path} in {owner}/{repo}",
  )
  return {"yaml": _decode_content(parse_response(ContentFile, data))}


async def get_workflow_dispatch_inputs(
  client: GhClient, owner: str, repo: str, workflow_id: str
) -> dict[str, Any]:
  """List the inputs a workflow accepts when triggered manually."""
  result = await get_workflow_yaml(client, owner, repo, workflow_id)
  return extract_dispatch_inputs(result["yaml"])
