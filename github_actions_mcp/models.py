"""
Response models for the GitHub Actions REST endpoints.

Each payload is validated once at the client boundary. Fields the models do
not name are kept as extras so nothing GitHub returns is dropped.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import GitHubValidationError


class _GitHubModel(BaseModel):
  model_config = ConfigDict(extra="allow")


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class Actor(_GitHubModel):
  login: str
  id: int
  type: Optional[str] = None
  html_url: Optional[str] = None


class MinimalRepository(_GitHubModel):
  id: int
  name: str
  full_name: str
  html_url: Optional[str] = None


# ---------------------------------------------------------------------------
# Workflows
# ---------------------------------------------------------------------------


class Workflow(_GitHubModel):
  id: int
  node_id: Optional[str] = None
  name: str
  path: str
  state: str
  created_at: Optional[str] = None
  updated_at: Optional[str] = None
  url: Optional[str] = None
  html_url: Optional[str] = None
  badge_url: Optional[str] = None


class Workflows(_GitHubModel):
  total_count: int
  workflows: list[Workflow] = Field(default_factory=list)


class UsageTiming(_GitHubModel):
  total_ms: Optional[int] = None
  jobs: Optional[int] = None


class WorkflowUsage(_GitHubModel):
  billable: dict[str, UsageTiming] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class WorkflowRun(_GitHubModel):
  id: int
  name: Optional[str] = None
  node_id: Optional[str] = None
  head_branch: Optional[str] = None
  head_sha: str
  path: Optional[str] = None
  run_number: int
  run_attempt: Optional[int] = None
  event: str
  display_title: Optional[str] = None
  status: Optional[str] = None
  conclusion: Optional[str] = None
  workflow_id: int
  check_suite_id: Optional[int] = None
  url: Optional[str] = None
  html_url: Optional[str] = None
  pull_requests: Optional[list[dict[str, Any]]] = None
  created_at: str
  updated_at: str
  run_started_at: Optional[str] = None
  actor: Optional[Actor] = None
  triggering_actor: Optional[Actor] = None
  jobs_url: Optional[str] = None
  logs_url: Optional[str] = None
  repository: Optional[MinimalRepository] = None


class WorkflowRuns(_GitHubModel):
  total_count: int
  workflow_runs: list[WorkflowRun] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


class JobStep(_GitHubModel):
  name: str
  status: str
  conclusion: Optional[str] = None
  number: int
  started_at: Optional[str] = None
  completed_at: Optional[str] = None


class Job(_GitHubModel):
  id: int
  run_id: int
  run_url: Optional[str] = None
  node_id: Optional[str] = None
  head_sha: Optional[str] = None
  url: Optional[str] = None
  html_url: Optional[str] = None
  status: str
  conclusion: Optional[str] = None
  started_at: Optional[str] = None
  completed_at: Optional[str] = None
  name: str
  steps: list[JobStep] = Field(default_factory=list)
  labels: list[str] = Field(default_factory=list)
  runner_id: Optional[int] = None
  runner_name: Optional[str] = None
  runner_group_id: Optional[int] = None
  runner_group_name: Optional[str] = None


class Jobs(_GitHubModel):
  total_count: int
  jobs: list[Job] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


class ContentFile(_GitHubModel):
  type: str
  name: str
  path: str
  sha: Optional[str] = None
  size: Optional[int] = None
  encoding: Optional[str] = None
  content: Optional[str] = None


M = TypeVar("M", bound=BaseModel)


def parse_response(model: type[M], data: Any) -> M:
  """Validate a response payload, raising GitHubValidationError on mismatch."""
  try:
    return model.model_validate(data)
  except PydanticValidationError as e:
    raise GitHubValidationError(
      f"Invalid response from GitHub API ({model.__name__}): {e.error_count()} field error(s)",
      response=data,
    ) from e
