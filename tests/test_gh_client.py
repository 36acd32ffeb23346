"""Tests for GhClient request execution and failure capture, without network."""

from __future__ import annotations

import socket
import time
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException

from github_actions_mcp.client.gh_client import (
  GhClient,
  get_client,
  outcome_from_exception,
  set_client,
  transport_error_code,
)
from github_actions_mcp.config import Config
from github_actions_mcp.errors import (
  ErrorKind,
  GitHubNetworkError,
  GitHubRateLimitError,
  GitHubResourceNotFoundError,
  GitHubTimeoutError,
)


def _connection_error(cause: BaseException) -> requests.exceptions.ConnectionError:
  err = requests.exceptions.ConnectionError("connection failed")
  err.__cause__ = cause
  return err


class TestTransportErrorCode:
  def test_dns_failure(self):
    err = _connection_error(socket.gaierror(-2, "Name or service not known"))
    assert transport_error_code(err) == "ENOTFOUND"

  def test_refused_in_args(self):
    err = requests.exceptions.ConnectionError(ConnectionRefusedError(111, "Connection refused"))
    assert transport_error_code(err) == "ECONNREFUSED"

  def test_reset(self):
    assert transport_error_code(_connection_error(ConnectionResetError(104, "reset"))) == "ECONNRESET"

  def test_tls(self):
    assert transport_error_code(requests.exceptions.SSLError("certificate verify failed")) == "ETLS"

  def test_unknown_connection_failure(self):
    assert transport_error_code(requests.exceptions.ConnectionError("?")) == "ECONNECTION"


class TestOutcomeFromException:
  def test_github_exception_keeps_status_headers_body(self):
    exc = GithubException(403, {"message": "Forbidden"}, {"x-ratelimit-remaining": "0"})
    outcome = outcome_from_exception(exc)
    assert outcome is not None
    assert outcome.status == 403
    assert outcome.body == {"message": "Forbidden"}
    assert outcome.headers == {"x-ratelimit-remaining": "0"}

  def test_read_timeout_is_deadline(self):
    outcome = outcome_from_exception(requests.exceptions.ReadTimeout("read timed out"))
    assert outcome is not None and outcome.timed_out

  def test_connect_timeout_is_transport(self):
    outcome = outcome_from_exception(requests.exceptions.ConnectTimeout("connect timed out"))
    assert outcome is not None
    assert outcome.transport_error == "ETIMEDOUT"

  def test_unrelated_exception(self):
    assert outcome_from_exception(KeyError("x")) is None


class TestRequest:
  async def test_returns_decoded_body(self, client: GhClient, requester: MagicMock):
    requester.requestJsonAndCheck.return_value = ({"etag": "x"}, {"total_count": 0})
    data = await client.get("/repos/a/b/actions/runs", page=2, per_page=None)
    assert data == {"total_count": 0}
    requester.requestJsonAndCheck.assert_called_once_with(
      "GET", "/repos/a/b/actions/runs", parameters={"page": 2}, input=None
    )

  async def test_post_sends_body(self, client: GhClient, requester: MagicMock):
    await client.post("/repos/a/b/actions/runs/1/cancel", body={"x": 1})
    requester.requestJsonAndCheck.assert_called_once_with(
      "POST", "/repos/a/b/actions/runs/1/cancel", parameters=None, input={"x": 1}
    )

  async def test_404_names_resource(self, client: GhClient, requester: MagicMock):
    requester.requestJsonAndCheck.side_effect = GithubException(404, {"message": "Not Found"}, {})
    with pytest.raises(GitHubResourceNotFoundError) as exc_info:
      await client.get("/repos/a/b/actions/runs/9", resource="workflow run 9 in a/b")
    assert exc_info.value.resource == "workflow run 9 in a/b"
    assert isinstance(exc_info.value.__cause__, GithubException)

  async def test_rate_limit(self, client: GhClient, requester: MagicMock):
    requester.requestJsonAndCheck.side_effect = GithubException(
      403,
      {"message": "API rate limit exceeded"},
      {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"},
    )
    with pytest.raises(GitHubRateLimitError) as exc_info:
      await client.get("/repos/a/b/actions/workflows")
    assert exc_info.value.reset_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

  async def test_dns_failure_is_network(self, client: GhClient, requester: MagicMock):
    requester.requestJsonAndCheck.side_effect = _connection_error(socket.gaierror(-2, "no host"))
    with pytest.raises(GitHubNetworkError) as exc_info:
      await client.get("/repos/a/b/actions/workflows")
    assert exc_info.value.error_code == "ENOTFOUND"

  async def test_socket_timeout_reports_configured_deadline(
    self, client: GhClient, requester: MagicMock
  ):
    requester.requestJsonAndCheck.side_effect = requests.exceptions.ReadTimeout("slow")
    with pytest.raises(GitHubTimeoutError) as exc_info:
      await client.get("/repos/a/b/actions/workflows")
    assert exc_info.value.timeout_ms == 2000

  async def test_await_abandoned_after_deadline(self, requester: MagicMock):
    gh_client = GhClient(Config(token="t", timeout_ms=50))
    gh_client._gh = MagicMock()
    gh_client._gh.requester = requester

    def slow(*args, **kwargs):
      time.sleep(0.3)
      return {}, {"late": True}

    requester.requestJsonAndCheck.side_effect = slow
    with pytest.raises(GitHubTimeoutError) as exc_info:
      await gh_client.get("/repos/a/b/actions/workflows")
    assert exc_info.value.kind is ErrorKind.TIMEOUT
    assert exc_info.value.timeout_ms == 50

  async def test_unexpected_errors_propagate(self, client: GhClient, requester: MagicMock):
    requester.requestJsonAndCheck.side_effect = RuntimeError("kaboom")
    with pytest.raises(RuntimeError, match="kaboom"):
      await client.get("/repos/a/b/actions/workflows")


class TestSingleton:
  def test_get_client_requires_creation(self):
    set_client(None)
    with pytest.raises(RuntimeError):
      get_client()

  def test_uninitialized_client_refuses_requests(self, config: Config):
    with pytest.raises(RuntimeError):
      _ = GhClient(config).gh
