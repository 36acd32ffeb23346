"""
workflow_dispatch input extraction from GitHub Actions workflow YAML.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from .errors import GitHubValidationError

log = logging.getLogger("github_actions_mcp.workflow_yaml")

PARSE_ERROR = "Failed to parse workflow YAML"
NO_INPUTS_ERROR = "No workflow_dispatch inputs found in workflow YAML."

_BOOL_TAG = "tag:yaml.org,2002:bool"


class WorkflowYamlError(GitHubValidationError):
  """The workflow file is not valid YAML."""


class WorkflowLoader(yaml.SafeLoader):
  """SafeLoader with YAML 1.2 core booleans: on/off/yes/no stay strings."""


WorkflowLoader.yaml_implicit_resolvers = {
  first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
  for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
WorkflowLoader.add_implicit_resolver(
  _BOOL_TAG,
  re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
  list("tTfF"),
)


def parse_workflow_yaml(text: str) -> Any:
  try:
    return yaml.load(text, Loader=WorkflowLoader)
  except (yaml.YAMLError, RecursionError) as e:
    raise WorkflowYamlError(PARSE_ERROR, field="yaml", value=str(e)) from e


def _triggers(doc: Any) -> Any:
  if not isinstance(doc, dict):
    return None
  return doc.get("on")


def find_dispatch_inputs(doc: Any) -> list[dict[str, Any]] | None:
  """
  Return the declared workflow_dispatch inputs, or None when the document
  declares none.

  An explicit empty `inputs: {}` yields an empty list.
  """
  triggers = _triggers(doc)
  if not isinstance(triggers, dict):
    return None
  dispatch = triggers.get("workflow_dispatch")
  if not isinstance(dispatch, dict):
    return None
  inputs = dispatch.get("inputs")
  if not isinstance(inputs, dict):
    return None

  result: list[dict[str, Any]] = []
  for name, meta in inputs.items():
    if isinstance(meta, dict):
      result.append({"name": str(name), **meta})
    else:
      result.append({"name": str(name)})
  return result


def extract_dispatch_inputs(text: str) -> dict[str, Any]:
  """Parse workflow YAML and describe its workflow_dispatch inputs."""
  try:
    doc = parse_workflow_yaml(text)
  except WorkflowYamlError as e:
    log.info("Workflow YAML did not parse: %s", e.value)
    return {"error": PARSE_ERROR, "details": e.value}

  inputs = find_dispatch_inputs(doc)
  if inputs is None:
    return {"error": NO_INPUTS_ERROR}
  return {"inputs": inputs}
