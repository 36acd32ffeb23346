"""Actions/workflow domain tool handlers."""

from __future__ import annotations

from typing import Any

from ..api import actions_api
from ..client.gh_client import get_client
from ..helpers import ErrorCategory, ToolResult, json_result, log_and_format_error
from ..validation import (
  opt_boolean,
  opt_choice,
  opt_number,
  opt_string,
  opt_string_map,
  req_string,
  validate_owner_repo,
  validate_positive_int,
  validate_workflow_id,
)


async def list_workflows(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    result = await actions_api.list_workflows(
      get_client(),
      owner,
      repo,
      page=opt_number(args, "page"),
      per_page=opt_number(args, "perPage"),
    )
    return json_result(result)
  except Exception as e:
    return log_and_format_error("list_workflows", e, ErrorCategory.WORKFLOW)


async def get_workflow(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = validate_workflow_id(args.get("workflowId"))
    result = await actions_api.get_workflow(get_client(), owner, repo, workflow_id)
    return json_result(result)
  except Exception as e:
    return log_and_format_error("get_workflow", e, ErrorCategory.WORKFLOW)


async def get_workflow_usage(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = validate_workflow_id(args.get("workflowId"))
    result = await actions_api.get_workflow_usage(get_client(), owner, repo, workflow_id)
    return json_result(result)
  except Exception as e:
    return log_and_format_error("get_workflow_usage", e, ErrorCategory.WORKFLOW)


async def list_workflow_runs(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = args.get("workflowId")
    if isinstance(workflow_id, str) and not workflow_id.strip():
      workflow_id = None
    check_suite_id = args.get("checkSuiteId")

    result = await actions_api.list_workflow_runs(
      get_client(),
      owner,
      repo,
      workflow_id=validate_workflow_id(workflow_id) if workflow_id is not None else None,
      actor=opt_string(args, "actor"),
      branch=opt_string(args, "branch"),
      event=opt_string(args, "event"),
      status=opt_choice(args, "status", actions_api.RUN_STATUSES),
      created=opt_string(args, "created"),
      exclude_pull_requests=opt_boolean(args, "excludePullRequests"),
      check_suite_id=(
        validate_positive_int(check_suite_id, "checkSuiteId") if check_suite_id is not None else None
      ),
      page=opt_number(args, "page"),
      per_page=opt_number(args, "perPage"),
    )
    return json_result(result)
  except Exception as e:
    return log_and_format_error("list_workflow_runs", e, ErrorCategory.RUN)


async def get_workflow_run(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    run_id = validate_positive_int(args.get("runId"), "runId")
    result = await actions_api.get_workflow_run(get_client(), owner, repo, run_id)
    return json_result(result)
  except Exception as e:
    return log_and_format_error("get_workflow_run", e, ErrorCategory.RUN)


async def get_workflow_run_jobs(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    run_id = validate_positive_int(args.get("runId"), "runId")
    result = await actions_api.get_workflow_run_jobs(
      get_client(),
      owner,
      repo,
      run_id,
      filter=opt_choice(args, "filter", actions_api.JOB_FILTERS),
      page=opt_number(args, "page"),
      per_page=opt_number(args, "perPage"),
    )
    return json_result(result)
  except Exception as e:
    return log_and_format_error("get_workflow_run_jobs", e, ErrorCategory.JOB)


async def trigger_workflow(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = validate_workflow_id(args.get("workflowId"))
    ref = req_string(args, "ref")
    inputs = opt_string_map(args, "inputs")
    result = await actions_api.trigger_workflow(
      get_client(), owner, repo, workflow_id, ref, inputs
    )
    return json_result(result)
  except Exception as e:
    return log_and_format_error("trigger_workflow", e, ErrorCategory.DISPATCH)


async def cancel_workflow_run(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    run_id = validate_positive_int(args.get("runId"), "runId")
    result = await actions_api.cancel_workflow_run(get_client(), owner, repo, run_id)
    return json_result(result)
  except Exception as e:
    return log_and_format_error("cancel_workflow_run", e, ErrorCategory.RUN)


async def rerun_workflow(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    run_id = validate_positive_int(args.get("runId"), "runId")
    result = await actions_api.rerun_workflow_run(get_client(), owner, repo, run_id)
    return json_result(result)
  except Exception as e:
    return log_and_format_error("rerun_workflow", e, ErrorCategory.RUN)


async def get_workflow_yaml(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = req_string(args, "workflowId")
    result = await actions_api.get_workflow_yaml(get_client(), owner, repo, workflow_id)
    # Raw YAML reads better than a JSON-escaped string
    return ToolResult(content=result["yaml"])
  except Exception as e:
    return log_and_format_error("get_workflow_yaml", e, ErrorCategory.YAML)


async def get_workflow_dispatch_inputs(args: dict[str, Any]) -> ToolResult:
  try:
    owner, repo = validate_owner_repo(args)
    workflow_id = req_string(args, "workflowId")
    result = await actions_api.get_workflow_dispatch_inputs(
      get_client(), owner, repo, workflow_id
    )
    return json_result(result)
  except Exception as e:
    return log_and_format_error("get_workflow_dispatch_inputs", e, ErrorCategory.YAML)
