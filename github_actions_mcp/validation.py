"""
Input validation helpers for GitHub Actions tool arguments.

Owner and repository names are checked before they are interpolated into
any URL.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

from .errors import GitHubValidationError

ValidationError = GitHubValidationError

MAX_NAME_LENGTH = 100

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _validate_name(value: Any, field: str, label: str) -> str:
  if not isinstance(value, str) or not value:
    raise ValidationError(f"Invalid {label}: must be a non-empty string", field=field, value=value)
  if len(value) > MAX_NAME_LENGTH:
    raise ValidationError(
      f"Invalid {label}: longer than {MAX_NAME_LENGTH} characters", field=field, value=value
    )
  if not _NAME_RE.match(value):
    raise ValidationError(
      f"Invalid {label}: '{value}' may only contain letters, digits, '-', '_' and '.'",
      field=field,
      value=value,
    )
  if value.strip(".") == "":
    raise ValidationError(f"Invalid {label}: '{value}'", field=field, value=value)
  return value


def validate_owner_name(owner: Any) -> str:
  """Validate a user or organization login."""
  return _validate_name(owner, "owner", "owner name")


def validate_repository_name(repo: Any) -> str:
  """Validate a repository name."""
  return _validate_name(repo, "repo", "repository name")


def validate_owner_repo(args: dict[str, Any]) -> tuple[str, str]:
  """Extract and validate owner and repo from args."""
  owner = validate_owner_name(args.get("owner"))
  repo = validate_repository_name(args.get("repo"))
  return owner, repo


def validate_workflow_id(value: Any, param_name: str = "workflowId") -> str:
  """Accept a numeric workflow ID or a workflow file name."""
  if isinstance(value, bool):
    raise ValidationError(f"Invalid {param_name}", field=param_name, value=value)
  if isinstance(value, int):
    return str(value)
  if isinstance(value, str) and value.strip():
    return value.strip()
  raise ValidationError(f"Missing required parameter: {param_name}", field=param_name, value=value)


def path_segment(value: str | int) -> str:
  """Percent-encode a value for use as a single URL path segment."""
  return quote(str(value), safe="")


def req_string(args: dict[str, Any], key: str) -> str:
  """Read a required string from args."""
  v = args.get(key)
  if not isinstance(v, str) or not v.strip():
    raise ValidationError(f"Missing required parameter: {key}", field=key, value=v)
  return v.strip()


def opt_string(args: dict[str, Any], key: str) -> str | None:
  """Read an optional string from args."""
  v = args.get(key)
  if isinstance(v, str) and v.strip():
    return v.strip()
  return None


def opt_number(args: dict[str, Any], key: str) -> int | None:
  """Read an optional positive integer from args."""
  v = args.get(key)
  if v is None:
    return None
  return validate_positive_int(v, key)


def opt_boolean(args: dict[str, Any], key: str, fallback: bool = False) -> bool:
  """Read an optional boolean from args."""
  v = args.get(key)
  return v if isinstance(v, bool) else fallback


def opt_choice(args: dict[str, Any], key: str, choices: tuple[str, ...]) -> str | None:
  """Read an optional string restricted to a fixed set of values."""
  v = opt_string(args, key)
  if v is None:
    return None
  if v not in choices:
    raise ValidationError(
      f"Invalid {key}: '{v}'. Expected one of: {', '.join(choices)}", field=key, value=v
    )
  return v


def opt_string_map(args: dict[str, Any], key: str) -> dict[str, str]:
  """Read an optional string-to-string mapping from args."""
  v = args.get(key)
  if v is None:
    return {}
  if not isinstance(v, dict):
    raise ValidationError(f"Invalid {key}: must be an object", field=key, value=v)
  result: dict[str, str] = {}
  for name, item in v.items():
    if not isinstance(item, str):
      raise ValidationError(
        f"Invalid {key}: value for '{name}' must be a string", field=key, value=v
      )
    result[str(name)] = item
  return result


def validate_positive_int(value: Any, param_name: str) -> int:
  """Validate a positive integer parameter."""
  if isinstance(value, bool):
    raise ValidationError(
      f"Invalid {param_name}: must be a positive integer.", field=param_name, value=value
    )
  if isinstance(value, (int, float)):
    if isinstance(value, float) and not value.is_integer():
      raise ValidationError(
        f"Invalid {param_name}: must be a positive integer.", field=param_name, value=value
      )
    iv = int(value)
  elif isinstance(value, str):
    try:
      iv = int(value)
    except ValueError:
      raise ValidationError(
        f"Invalid {param_name}: must be a positive integer.", field=param_name, value=value
      ) from None
  else:
    raise ValidationError(
      f"Invalid {param_name}: must be a positive integer.", field=param_name, value=value
    )
  if iv <= 0:
    raise ValidationError(
      f"Invalid {param_name}: must be a positive integer.", field=param_name, value=value
    )
  return iv
