"""
GitHub client wrapper using PyGithub.

PyGithub is synchronous, so every request runs in a worker thread via
asyncio.to_thread and is awaited under the configured deadline. Requests go
through PyGithub's raw requester so status codes, headers and transport
failures reach the error classifier untouched.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import json
import logging
import socket
import ssl
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TypeVar

import requests
from github import Auth, Github, GithubException

from ..errors import CallOutcome, GitHubValidationError, classify_failure

if TYPE_CHECKING:
  from collections.abc import Callable

  from ..config import Config

log = logging.getLogger("github_actions_mcp.client")

T = TypeVar("T")


async def _run_sync(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
  """Run a synchronous PyGithub call in a thread."""
  return await asyncio.to_thread(functools.partial(fn, *args, **kwargs))


# ---------------------------------------------------------------------------
# Failure capture
# ---------------------------------------------------------------------------


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
  seen: set[int] = set()
  stack: list[Any] = [exc]
  while stack:
    current = stack.pop()
    if not isinstance(current, BaseException) or id(current) in seen:
      continue
    seen.add(id(current))
    yield current
    stack.extend((current.__cause__, current.__context__, getattr(current, "reason", None)))
    stack.extend(current.args)


def transport_error_code(exc: BaseException) -> str:
  """Stable code for a transport-level failure."""
  for cause in _exception_chain(exc):
    if isinstance(cause, socket.gaierror):
      return "ENOTFOUND"
    if isinstance(cause, ConnectionRefusedError):
      return "ECONNREFUSED"
    if isinstance(cause, ConnectionResetError):
      return "ECONNRESET"
    if isinstance(cause, (ssl.SSLError, requests.exceptions.SSLError)):
      return "ETLS"
  if isinstance(exc, requests.exceptions.ConnectionError):
    return "ECONNECTION"
  return "ENETWORK"


def outcome_from_exception(exc: BaseException) -> CallOutcome | None:
  """Describe a failed request, or None if exc is not a request failure."""
  if isinstance(exc, GithubException):
    return CallOutcome(status=exc.status, headers=exc.headers, body=exc.data)
  if isinstance(exc, requests.exceptions.ConnectTimeout):
    return CallOutcome(transport_error="ETIMEDOUT", transport_message=str(exc))
  if isinstance(exc, (requests.exceptions.Timeout, asyncio.TimeoutError, TimeoutError)):
    return CallOutcome(timed_out=True)
  if isinstance(exc, (requests.exceptions.RequestException, ConnectionError, ssl.SSLError)):
    return CallOutcome(transport_error=transport_error_code(exc), transport_message=str(exc))
  return None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GhClient:
  """Async-compatible wrapper around PyGithub's requester."""

  def __init__(self, config: Config) -> None:
    self._config = config
    self._gh: Github | None = None

  async def initialize(self) -> None:
    """Build the PyGithub client from the resolved configuration."""
    self._gh = Github(
      auth=Auth.Token(self._config.token),
      base_url=self._config.base_url,
      timeout=self._config.timeout_seconds,
      retry=None,
      per_page=100,
    )
    log.info("PyGithub client initialized for %s", self._config.base_url)

  @property
  def gh(self) -> Github:
    if not self._gh:
      raise RuntimeError("GhClient not initialized. Call initialize() first.")
    return self._gh

  @property
  def timeout_ms(self) -> int:
    return self._config.timeout_ms

  async def request(
    self,
    verb: str,
    path: str,
    *,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
    resource: str | None = None,
  ) -> Any:
    """
    Issue one REST call and return the decoded JSON body.

    Failures are raised as classified GitHubError subclasses; `resource`
    names what a 404 refers to.
    """
    query = {k: v for k, v in (params or {}).items() if v is not None}
    log.debug("%s %s %s", verb, path, query or "")
    call = functools.partial(
      self.gh.requester.requestJsonAndCheck,
      verb,
      path,
      parameters=query or None,
      input=body,
    )
    try:
      _headers, data = await asyncio.wait_for(
        asyncio.to_thread(call), timeout=self._config.timeout_seconds
      )
    except json.JSONDecodeError as e:
      raise GitHubValidationError("Invalid response from GitHub API", response=e.doc) from e
    except Exception as e:
      outcome = outcome_from_exception(e)
      if outcome is None:
        raise
      error = classify_failure(outcome, resource=resource or path, timeout_ms=self.timeout_ms)
      log.debug("%s %s failed: %s (%s)", verb, path, error.kind.value, error.message)
      raise error from e
    return data

  async def get(self, path: str, resource: str | None = None, **params: Any) -> Any:
    """GET request."""
    return await self.request("GET", path, params=params, resource=resource)

  async def post(
    self,
    path: str,
    body: dict[str, Any] | None = None,
    resource: str | None = None,
  ) -> Any:
    """POST request."""
    return await self.request("POST", path, body=body, resource=resource)

  async def close(self) -> None:
    """Close the underlying connection."""
    if self._gh:
      with contextlib.suppress(Exception):
        await _run_sync(self._gh.close)
      self._gh = None


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_client_instance: GhClient | None = None


def create_client(config: Config) -> GhClient:
  """Create and return the singleton GhClient."""
  global _client_instance
  _client_instance = GhClient(config)
  return _client_instance


def set_client(client: GhClient | None) -> None:
  global _client_instance
  _client_instance = client


def get_client() -> GhClient:
  """Return the singleton GhClient. Raises if not initialized."""
  if _client_instance is None:
    raise RuntimeError("GhClient not initialized. Call create_client() first.")
  return _client_instance
