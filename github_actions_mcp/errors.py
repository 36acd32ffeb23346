"""
GitHub error taxonomy, failure classification and user-facing formatting.

Every failed outbound call is reduced to a CallOutcome and classified into
exactly one ErrorKind. format_github_error() turns the resulting exception
into the text shown to the calling assistant.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

log = logging.getLogger("github_actions_mcp.errors")

# Used when a rate-limited response carries no usable reset header.
DEFAULT_RATE_LIMIT_WINDOW = timedelta(seconds=60)


class ErrorKind(str, Enum):
  VALIDATION = "validation"
  RESOURCE_NOT_FOUND = "resource_not_found"
  AUTHENTICATION = "authentication"
  PERMISSION = "permission"
  RATE_LIMIT = "rate_limit"
  CONFLICT = "conflict"
  TIMEOUT = "timeout"
  NETWORK = "network"
  GENERIC = "generic"


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------


class GitHubError(Exception):
  """Base class for every classified GitHub failure."""

  kind: ErrorKind = ErrorKind.GENERIC

  def __init__(self, message: str, status: int | None = None, response: Any = None) -> None:
    super().__init__(message)
    self.message = message
    self.status = status
    self.response = response


class GitHubValidationError(GitHubError):
  kind = ErrorKind.VALIDATION

  def __init__(
    self,
    message: str,
    field: str | None = None,
    value: Any = None,
    response: Any = None,
  ) -> None:
    super().__init__(message, status=None, response=response)
    self.field = field
    self.value = value


class GitHubResourceNotFoundError(GitHubError):
  kind = ErrorKind.RESOURCE_NOT_FOUND

  def __init__(self, message: str, resource: str | None = None, response: Any = None) -> None:
    super().__init__(message, status=404, response=response)
    self.resource = resource


class GitHubAuthenticationError(GitHubError):
  kind = ErrorKind.AUTHENTICATION

  def __init__(self, message: str = "Authentication failed", response: Any = None) -> None:
    super().__init__(message, status=401, response=response)


class GitHubPermissionError(GitHubError):
  kind = ErrorKind.PERMISSION

  def __init__(self, message: str = "Insufficient permissions", response: Any = None) -> None:
    super().__init__(message, status=403, response=response)


class GitHubRateLimitError(GitHubError):
  kind = ErrorKind.RATE_LIMIT

  def __init__(
    self,
    message: str,
    reset_at: datetime,
    status: int | None = 403,
    response: Any = None,
  ) -> None:
    super().__init__(message, status=status, response=response)
    self.reset_at = reset_at


class GitHubConflictError(GitHubError):
  kind = ErrorKind.CONFLICT

  def __init__(self, message: str, response: Any = None) -> None:
    super().__init__(message, status=409, response=response)


class GitHubTimeoutError(GitHubError):
  kind = ErrorKind.TIMEOUT

  def __init__(self, message: str, timeout_ms: int) -> None:
    super().__init__(message)
    self.timeout_ms = timeout_ms


class GitHubNetworkError(GitHubError):
  kind = ErrorKind.NETWORK

  def __init__(self, message: str, error_code: str) -> None:
    super().__init__(message)
    self.error_code = error_code


class GitHubGenericError(GitHubError):
  kind = ErrorKind.GENERIC


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@dataclass
class CallOutcome:
  """Everything known about a failed outbound call."""

  status: int | None = None
  headers: Mapping[str, Any] | None = None
  body: Any = None
  transport_error: str | None = None
  timed_out: bool = False
  transport_message: str | None = None


def _header(headers: Mapping[str, Any] | None, name: str) -> str | None:
  if not headers:
    return None
  wanted = name.lower()
  for key, value in headers.items():
    if str(key).lower() == wanted:
      return None if value is None else str(value).strip()
  return None


def _body_message(body: Any, default: str) -> str:
  if isinstance(body, Mapping):
    msg = body.get("message")
    if msg:
      return str(msg)
  if isinstance(body, bytes):
    body = body.decode("utf-8", errors="replace")
  if isinstance(body, str) and body.strip():
    return body.strip()
  return default


def rate_limit_indicated(status: int | None, headers: Mapping[str, Any] | None) -> bool:
  """True when a 403/429 response carries rate-limit headers."""
  if status not in (403, 429):
    return False
  if _header(headers, "retry-after") is not None:
    return True
  if _header(headers, "x-ratelimit-remaining") == "0":
    return True
  return status == 429 and _header(headers, "x-ratelimit-reset") is not None


def parse_rate_limit_reset(
  headers: Mapping[str, Any] | None,
  now: datetime | None = None,
) -> datetime:
  """
  Work out when a rate limit lifts.

  x-ratelimit-reset holds epoch seconds; retry-after holds a delay in
  seconds. Without either, now + DEFAULT_RATE_LIMIT_WINDOW.
  """
  now = now or datetime.now(timezone.utc)

  reset = _header(headers, "x-ratelimit-reset")
  if reset is not None:
    try:
      return datetime.fromtimestamp(int(reset), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
      pass

  retry_after = _header(headers, "retry-after")
  if retry_after is not None:
    try:
      return now + timedelta(seconds=max(int(retry_after), 0))
    except (ValueError, OverflowError):
      pass

  return now + DEFAULT_RATE_LIMIT_WINDOW


def _classify(
  outcome: CallOutcome,
  resource: str | None,
  timeout_ms: int,
  now: datetime | None,
) -> GitHubError:
  if outcome.transport_error:
    detail = outcome.transport_message or "Could not reach the GitHub API"
    return GitHubNetworkError(detail, outcome.transport_error)

  if outcome.timed_out:
    return GitHubTimeoutError(f"Request timed out after {timeout_ms}ms", timeout_ms)

  status = outcome.status
  body = outcome.body

  if status == 401:
    return GitHubAuthenticationError(_body_message(body, "Authentication failed"), response=body)

  if rate_limit_indicated(status, outcome.headers):
    return GitHubRateLimitError(
      _body_message(body, "Rate limit exceeded"),
      parse_rate_limit_reset(outcome.headers, now),
      status=status,
      response=body,
    )

  if status == 403:
    return GitHubPermissionError(_body_message(body, "Insufficient permissions"), response=body)

  if status == 404:
    return GitHubResourceNotFoundError(
      _body_message(body, "Resource not found"), resource=resource, response=body
    )

  if status == 409:
    return GitHubConflictError(_body_message(body, "Conflict"), response=body)

  label = f"HTTP {status}" if status is not None else "no response"
  return GitHubGenericError(
    _body_message(body, f"GitHub API request failed ({label})"),
    status=status,
    response=body,
  )


def classify_failure(
  outcome: CallOutcome,
  resource: str | None = None,
  timeout_ms: int = 0,
  now: datetime | None = None,
) -> GitHubError:
  """
  Map a failed call to exactly one GitHubError subclass.

  Priority: transport failure, then timeout, then status code. Never raises;
  anything unexpected while classifying yields GitHubGenericError.
  """
  try:
    return _classify(outcome, resource, timeout_ms, now)
  except Exception as exc:
    log.debug("Classification fell back to generic: %s", exc, exc_info=True)
    status = outcome.status if isinstance(outcome.status, int) else None
    return GitHubGenericError("GitHub API request failed", status=status, response=outcome.body)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _dump(value: Any) -> str:
  if isinstance(value, str):
    return value
  try:
    return json.dumps(value, default=str)
  except (TypeError, ValueError):
    return repr(value)


def _format_validation(error: GitHubError) -> str:
  text = f"Validation Error: {error.message}"
  if error.response is not None:
    text += f"\nDetails: {_dump(error.response)}"
  return text


def _format_not_found(error: GitHubError) -> str:
  text = f"Not Found: {error.message}"
  resource = getattr(error, "resource", None)
  if resource:
    text += f"\nResource: {resource}"
  return text


def _format_rate_limit(error: GitHubError) -> str:
  reset_at: datetime = error.reset_at  # type: ignore[attr-defined]
  return f"Rate Limit Exceeded: {error.message}\nResets at: {reset_at.isoformat()}"


def _format_timeout(error: GitHubError) -> str:
  return f"Timeout: {error.message}\nTimeout setting: {error.timeout_ms}ms"  # type: ignore[attr-defined]


def _format_network(error: GitHubError) -> str:
  return f"Network Error: {error.message}\nError code: {error.error_code}"  # type: ignore[attr-defined]


def _format_generic(error: GitHubError) -> str:
  text = f"GitHub API Error: {error.message}"
  if error.status is not None:
    text += f"\nStatus: {error.status}"
  if error.response is not None and _dump(error.response) != error.message:
    text += f"\nResponse: {_dump(error.response)}"
  return text


FORMAT_RULES: dict[ErrorKind, Callable[[GitHubError], str]] = {
  ErrorKind.VALIDATION: _format_validation,
  ErrorKind.RESOURCE_NOT_FOUND: _format_not_found,
  ErrorKind.AUTHENTICATION: lambda e: f"Authentication Failed: {e.message}",
  ErrorKind.PERMISSION: lambda e: f"Permission Denied: {e.message}",
  ErrorKind.RATE_LIMIT: _format_rate_limit,
  ErrorKind.CONFLICT: lambda e: f"Conflict: {e.message}",
  ErrorKind.TIMEOUT: _format_timeout,
  ErrorKind.NETWORK: _format_network,
  ErrorKind.GENERIC: _format_generic,
}


def format_github_error(error: GitHubError) -> str:
  """Render a classified error as user-visible text."""
  return FORMAT_RULES[error.kind](error)
