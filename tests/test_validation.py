"""Tests for owner/repo validators and argument readers."""

from __future__ import annotations

import pytest

from github_actions_mcp.errors import ErrorKind, GitHubValidationError
from github_actions_mcp.validation import (
  opt_choice,
  opt_number,
  opt_string_map,
  path_segment,
  req_string,
  validate_owner_name,
  validate_owner_repo,
  validate_positive_int,
  validate_repository_name,
  validate_workflow_id,
)

REJECTED = ["", "octo/cat", "octo cat", "a" * 200, ".", "..", "octo?cat", "octo#cat", None, 42]
ACCEPTED = ["octocat", "my-org_2.bot", "Hello-World", ".github"]


class TestNameValidators:
  @pytest.mark.parametrize("value", REJECTED)
  def test_owner_rejects(self, value):
    with pytest.raises(GitHubValidationError) as exc_info:
      validate_owner_name(value)
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.field == "owner"
    assert exc_info.value.value == value

  @pytest.mark.parametrize("value", REJECTED)
  def test_repo_rejects(self, value):
    with pytest.raises(GitHubValidationError) as exc_info:
      validate_repository_name(value)
    assert exc_info.value.field == "repo"

  @pytest.mark.parametrize("value", ACCEPTED)
  def test_accepts(self, value):
    assert validate_owner_name(value) == value
    assert validate_repository_name(value) == value

  def test_length_boundary(self):
    assert validate_repository_name("a" * 100) == "a" * 100
    with pytest.raises(GitHubValidationError):
      validate_repository_name("a" * 101)

  def test_owner_and_repo_checked_independently(self):
    with pytest.raises(GitHubValidationError) as exc_info:
      validate_owner_repo({"owner": "octocat", "repo": "bad repo"})
    assert exc_info.value.field == "repo"


class TestWorkflowId:
  def test_numeric_and_file_name(self):
    assert validate_workflow_id(161335) == "161335"
    assert validate_workflow_id("ci.yml") == "ci.yml"

  @pytest.mark.parametrize("value", [None, "", "   ", True])
  def test_rejects_missing(self, value):
    with pytest.raises(GitHubValidationError):
      validate_workflow_id(value)

  def test_path_segment_keeps_identifier_in_one_segment(self):
    assert path_segment("ci.yml") == "ci.yml"
    assert path_segment("../../user") == "..%2F..%2Fuser"


class TestArgumentReaders:
  def test_req_string(self):
    assert req_string({"ref": " main "}, "ref") == "main"
    with pytest.raises(GitHubValidationError, match="Missing required parameter: ref"):
      req_string({}, "ref")

  def test_positive_int(self):
    assert validate_positive_int(5, "runId") == 5
    assert validate_positive_int(5.0, "runId") == 5
    assert validate_positive_int("17", "runId") == 17
    for bad in (0, -1, 1.5, "abc", None, True):
      with pytest.raises(GitHubValidationError):
        validate_positive_int(bad, "runId")

  def test_opt_number(self):
    assert opt_number({}, "page") is None
    assert opt_number({"page": 3}, "page") == 3
    with pytest.raises(GitHubValidationError):
      opt_number({"page": 0}, "page")

  def test_opt_choice(self):
    assert opt_choice({"filter": "all"}, "filter", ("latest", "all")) == "all"
    assert opt_choice({}, "filter", ("latest", "all")) is None
    with pytest.raises(GitHubValidationError):
      opt_choice({"filter": "newest"}, "filter", ("latest", "all"))

  def test_opt_string_map(self):
    assert opt_string_map({}, "inputs") == {}
    assert opt_string_map({"inputs": {"env": "prod"}}, "inputs") == {"env": "prod"}
    with pytest.raises(GitHubValidationError):
      opt_string_map({"inputs": {"debug": True}}, "inputs")
    with pytest.raises(GitHubValidationError):
      opt_string_map({"inputs": ["env"]}, "inputs")
