"""
Shared result and error handling helpers for the tool handlers.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import GitHubError, format_github_error

log = logging.getLogger("github_actions_mcp.helpers")


# ---------------------------------------------------------------------------
# Tool result
# ---------------------------------------------------------------------------


@dataclass
class ToolResult:
  content: str
  is_error: bool = False


def json_result(data: Any) -> ToolResult:
  """Serialize an operation result as JSON text."""
  return ToolResult(content=json.dumps(data, default=str))


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class ErrorCategory(str, Enum):
  WORKFLOW = "WORKFLOW"
  RUN = "RUN"
  JOB = "JOB"
  DISPATCH = "DISPATCH"
  YAML = "YAML"


def log_and_format_error(
  function_name: str,
  error: Exception,
  category: str | ErrorCategory | None = None,
) -> ToolResult:
  """
  Turn a failed tool call into an error result.

  Classified GitHub errors are shown to the caller in full. Anything else is
  logged with its traceback and reported only by code.
  """
  if isinstance(error, GitHubError):
    log.warning("[GH] %s failed - %s: %s", function_name, error.kind.value, error.message)
    return ToolResult(content=format_github_error(error), is_error=True)

  prefix = category.value if isinstance(category, ErrorCategory) else (category or "GEN")
  hash_val = sum(ord(c) for c in function_name) % 1000
  error_code = f"{prefix}-ERR-{hash_val:03d}"

  log.error(
    "[GH] Error in %s - Code: %s - %s", function_name, error_code, error, exc_info=error
  )
  return ToolResult(
    content=f"An error occurred (code: {error_code}). Check logs for details.",
    is_error=True,
  )
